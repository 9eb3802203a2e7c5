import re
import threading
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import requests

from endstone_itemsets.utils.command_util import AUDIT_PERMISSION
from endstone_itemsets.utils.config_util import get_module

if TYPE_CHECKING:
    from endstone_itemsets.itemsets import ItemSets

WEBHOOK_SECTIONS = {
    "grant": "grants",
    "reset": "resets",
}


def strip_formatting(message: str) -> str:
    return re.sub(r'§.', '', message)


def log(self: "ItemSets", message: str, type: str) -> bool:
    """Audit a grant or reset: console, players holding itemsets.audit, then Discord."""
    print(f"[ItemSets] {strip_formatting(message)}")

    for player in self.server.online_players:
        if player.has_permission(AUDIT_PERMISSION):
            player.send_message(message)

    return discord_relay(message, type)


def discord_relay(message: str, type: str) -> bool:
    """Send message to Discord on a background thread without blocking the command."""
    discord_logging = get_module("discord_logging")

    webhook_url = get_webhook_url(type, discord_logging)
    if not webhook_url:
        return False  # No valid webhook found or enabled

    embed = discord_logging.get("embed", {})
    payload = {
        "embeds": [
            {
                "title": embed.get("title", "Item Sets"),
                "description": strip_formatting(message),
                "color": embed.get("color", 781919),
                "footer": {
                    "text": f"Logged at {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}"
                }
            }
        ]
    }

    threading.Thread(target=send_discord_message, args=(webhook_url, payload), daemon=True).start()
    return True


def get_webhook_url(type: str, discord_logging: dict) -> str | None:
    section = discord_logging.get(WEBHOOK_SECTIONS.get(type, ""), {})
    if section.get("enabled") and section.get("webhook"):
        return section["webhook"]
    return None


MAX_RETRIES = 5  # Max retries in case of rate limits
INITIAL_BACKOFF = 1  # Start with 1 second


def send_discord_message(webhook_url: str, payload: dict, sleep=time.sleep) -> bool:
    """Send HTTP request to Discord webhook with exponential backoff on 429."""
    retries = 0
    backoff = INITIAL_BACKOFF

    while retries < MAX_RETRIES:
        try:
            response = requests.post(webhook_url, json=payload, timeout=10)
        except requests.exceptions.RequestException as e:
            print(f"[ItemSets - Discord Log] Failed to send Discord message: {e}")
            return False

        if response.status_code == 429:
            retries += 1
            wait_time = backoff * (2 ** retries)
            print(f"[ItemSets - Discord Log] Rate limit exceeded. Retrying in {wait_time}s...")
            sleep(wait_time)
            continue

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            print(f"[ItemSets - Discord Log] Failed to send Discord message: {e}")
            return False
        return True

    print("[ItemSets - Discord Log] Max retries reached. Failed to send message.")
    return False
