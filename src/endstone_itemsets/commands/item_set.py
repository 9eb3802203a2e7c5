from endstone_itemsets.utils.command_util import create_command, command_permission, is_elevated
from endstone_itemsets.utils.config_util import ItemSet, get_module
from endstone_itemsets.utils.errors import PlayerNotFoundError
from endstone_itemsets.utils.grant_util import grant_items
from endstone_itemsets.utils.logging_util import log
from endstone_itemsets.utils.router_util import CommandRouter, SUCCESS, FAILURE
from endstone_itemsets.utils.target_selector_util import resolve_player

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from endstone.command import CommandSender
    from endstone_itemsets.itemsets import ItemSets

PLAYER_NOT_FOUND_TEXT = "No player was found"


def create_item_set_command(item_set: ItemSet):
    item_names = ", ".join(f"x{entry.count} {entry.identifier.split(':')[-1]}" for entry in item_set.items)
    description = f"Gives the {item_set.command} item set ({item_names})"
    if item_set.one_use:
        description += ", once per player"

    return create_command(
        item_set.command,
        description,
        [
            f"/{item_set.key} [player: player]",
            f"/{item_set.key} <player: player> (clear)[itemsets_clear: itemsets_clear]"
        ],
        [command_permission(item_set.command)]
    )


def build_router(item_set: ItemSet) -> CommandRouter:
    router = CommandRouter(item_set.key)
    router.add((), lambda self, sender: self_invoke(self, sender, item_set),
               usage=f"/{item_set.key}")
    router.add(("<player>",), lambda self, sender, player: targeted_invoke(self, sender, item_set, player),
               requires=is_elevated, usage=f"/{item_set.key} <player>")
    router.add(("<player>", "clear"), lambda self, sender, player: targeted_clear(self, sender, item_set, player),
               requires=is_elevated, usage=f"/{item_set.key} <player> clear")
    return router


def report_error(sender: "CommandSender", error: Exception) -> int:
    """Turn anything raised inside a leaf into a message and a failed status."""
    if isinstance(error, PlayerNotFoundError) or PLAYER_NOT_FOUND_TEXT.lower() in str(error).lower():
        sender.send_error_message("§cPlayer not found!")
    else:
        print(f"[ItemSets] Unexpected error: {error}")
        sender.send_error_message("§cAn unexpected error occurred.")
    return FAILURE


def self_invoke(self: "ItemSets", sender: "CommandSender", item_set: ItemSet) -> int:
    player = self.as_player(sender)
    if player is None:
        sender.send_error_message("§cThis command can only be executed by a player")
        return FAILURE

    try:
        elevated = is_elevated(sender)
        if not elevated and not self.usage_gate.can_run(player, item_set.command, item_set.one_use):
            sender.send_error_message(f"§cYou've already received items from '{item_set.command}'.")
            return FAILURE

        if not grant_items(self, player, item_set):
            return FAILURE

        if item_set.one_use and not elevated:
            self.usage_gate.mark_run(player, item_set.command)
        return SUCCESS
    except Exception as e:
        return report_error(sender, e)


def targeted_invoke(self: "ItemSets", sender: "CommandSender", item_set: ItemSet, selector: str) -> int:
    try:
        target = resolve_player(self, selector, sender)
        if not self.usage_gate.can_run(target, item_set.command, item_set.one_use):
            sender.send_error_message(f"§cThe player has already received items from '{item_set.command}'.")
            return FAILURE

        if not grant_items(self, target, item_set):
            return FAILURE

        if item_set.one_use:
            self.usage_gate.mark_run(target, item_set.command)
        return SUCCESS
    except Exception as e:
        return report_error(sender, e)


def targeted_clear(self: "ItemSets", sender: "CommandSender", item_set: ItemSet, selector: str) -> int:
    try:
        target = resolve_player(self, selector, sender)
        self.usage_gate.clear_run(target, item_set.command)

        sender.send_message(f"§aCommand '{item_set.command}' cleared for {target.name}.")
        notice = f"Command '{item_set.command}' has been cleared by an operator."
        if get_module("broadcasts").get("clear_messages", True):
            self.server.broadcast_message(notice)
        else:
            target.send_message(notice)

        log(self, f"§e{sender.name} §6cleared §e{item_set.command} §6for §e{target.name}", "reset")
        return SUCCESS
    except Exception as e:
        return report_error(sender, e)
