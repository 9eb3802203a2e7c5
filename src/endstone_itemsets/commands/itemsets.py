from endstone_itemsets.utils.command_util import create_command, command_key

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from endstone.command import CommandSender
    from endstone_itemsets.itemsets import ItemSets

# Register command
command, permission = create_command(
    "itemsets",
    "Lists the configured item sets and whether you already claimed them!",
    [
        "/itemsets",
        "/itemsets (list)[itemsets_list: itemsets_list]",
        "/itemsets (info)[itemsets_info: itemsets_info] <set: string>"
    ],
    ["itemsets.command.itemsets"]
)


def handler(self: "ItemSets", sender: "CommandSender", args: list[str]) -> bool:
    if not args or args[0].lower() == "list":
        return list_item_sets(self, sender)

    if args[0].lower() == "info" and len(args) >= 2:
        return item_set_info(self, sender, args[1])

    sender.send_message("§cUsage: /itemsets [list|info <set>]")
    return False


def list_item_sets(self: "ItemSets", sender: "CommandSender") -> bool:
    if not self.item_sets:
        sender.send_message("§cNo item sets are configured")
        return True

    player = self.as_player(sender)
    lines = []
    for item_set in self.item_sets.values():
        line = f"§7- §b/{item_set.key}"
        if item_set.one_use:
            line += " §7(one use)"
            if player is not None:
                claimed = self.usage_gate.has_run(player, item_set.command)
                line += " §cclaimed" if claimed else " §aavailable"
        lines.append(line)

    sender.send_message("§aItem sets:\n" + "\n".join(lines))
    return True


def item_set_info(self: "ItemSets", sender: "CommandSender", name: str) -> bool:
    item_set = self.item_sets.get(command_key(name.lstrip("/")))
    if item_set is None:
        sender.send_message(f"§cNo item set named '{name}'")
        return False

    lines = [f"§7- §e{entry.identifier} §7x{entry.count}" for entry in item_set.items]
    header = f"§a{item_set.command}" + (" §7(one use)" if item_set.one_use else "")
    sender.send_message(header + "\n" + "\n".join(lines))
    return True
