import random
import re
from typing import TYPE_CHECKING

import numpy as np

from endstone_itemsets.utils.errors import PlayerNotFoundError

if TYPE_CHECKING:
    from endstone_itemsets.itemsets import ItemSets

ENTITY_SELECTORS = ("@e", "@n")
SELECTOR_PATTERN = re.compile(r"^@([spra])$")


def has_entity_selector(args: list[str]) -> bool:
    return any(selector in arg for arg in args for selector in ENTITY_SELECTORS)


def origin_position(origin) -> np.ndarray:
    loc = getattr(origin, "location",
                  getattr(getattr(origin, "block", None), "location", None))
    if loc is None:
        return np.zeros(3, dtype=np.float32)
    return np.array([loc.x, loc.y, loc.z], dtype=np.float32)


def get_matching_players(self: "ItemSets", selector: str, origin) -> list:
    """Online players matched by an exact (case-insensitive) name or a bare @s/@p/@r/@a selector."""
    online = list(self.server.online_players)

    if not selector.startswith("@"):
        lower = selector.lower()
        return [p for p in online if p.name.lower() == lower][:1]

    parsed = SELECTOR_PATTERN.match(selector.lower())
    if not parsed:
        return []
    selector_type = parsed.group(1)

    if selector_type == "s":
        player = self.as_player(origin)
        return [player] if player is not None else []

    if selector_type == "p":
        if not online:
            return []
        pos = np.array([[p.location.x, p.location.y, p.location.z] for p in online], dtype=np.float32)
        closest = np.argmin(np.sum((pos - origin_position(origin)) ** 2, axis=1))
        return [online[int(closest)]]

    if selector_type == "r":
        return [random.choice(online)] if online else []

    return online


def resolve_player(self: "ItemSets", selector: str, origin):
    """Resolve exactly one player; no match or several matches is a not-found."""
    selector = selector.strip().strip('"')
    if not selector:
        raise PlayerNotFoundError(selector)

    matched = get_matching_players(self, selector, origin)
    if len(matched) != 1:
        raise PlayerNotFoundError(selector)
    return matched[0]
