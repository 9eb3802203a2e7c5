from typing import TYPE_CHECKING

from endstone_itemsets.utils.config_util import ItemSet, get_module
from endstone_itemsets.utils.errors import GrantFailure
from endstone_itemsets.utils.logging_util import log

if TYPE_CHECKING:
    from endstone_itemsets.itemsets import ItemSets


def give_item_set(self: "ItemSets", player, item_set: ItemSet) -> None:
    """Give every stack of the set, stopping at the first one the server rejects."""
    for entry in item_set.items:
        try:
            stack = self.make_item_stack(entry.identifier, entry.count)
            player.inventory.add_item(stack)
        except Exception as e:
            raise GrantFailure(item_set.command, entry.identifier, e) from e


def grant_items(self: "ItemSets", player, item_set: ItemSet) -> bool:
    """Give the set to a player; stacks given before a failure are kept."""
    broadcasts = get_module("broadcasts")
    try:
        give_item_set(self, player, item_set)
    except GrantFailure as e:
        print(f"[ItemSets] Error giving items: {e}")
        self.server.broadcast_message(f"§cError giving items from '{item_set.command}': {e}")
        return False

    if broadcasts.get("grant_messages", True):
        self.server.broadcast_message(f"Items from '{item_set.command}' given to {player.name}")

    summary = ", ".join(f"x{entry.count} {entry.identifier}" for entry in item_set.items)
    log(self, f"§e{player.name} §6received §e{item_set.command} §7({summary})", "grant")
    return True
