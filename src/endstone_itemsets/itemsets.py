import os
import traceback

from endstone import Player
from endstone.command import Command, CommandSender
from endstone.inventory import ItemStack
from endstone.plugin import Plugin

from endstone_itemsets.commands import itemsets as itemsets_command
from endstone_itemsets.commands import preload_commands
from endstone_itemsets.utils.db_util import UsageDB
from endstone_itemsets.utils.router_util import SUCCESS
from endstone_itemsets.utils.target_selector_util import has_entity_selector
from endstone_itemsets.utils.usage_gate import UsageGate

preloaded_commands, preloaded_permissions, preloaded_routers, preloaded_item_sets = preload_commands()


class ItemSets(Plugin):
    api_version = "0.9"
    authors = ["ItemSets Contributors"]
    name = "itemsets"
    description = "Configurable commands that hand out predefined item sets, optionally once per player."

    commands = preloaded_commands
    permissions = preloaded_permissions

    def __init__(self):
        super().__init__()
        self.routers = preloaded_routers
        self.item_sets = preloaded_item_sets
        self.db = None
        self.usage_gate = None

    def on_load(self):
        print(f"[ItemSets] {len(self.item_sets)} item sets ready")

    def on_enable(self):
        self.db = UsageDB("usage.db")
        self.usage_gate = UsageGate(self.db)

    def on_disable(self):
        if self.db is not None:
            self.db.close_connection()
            self.db = None

    # HOST ADAPTERS
    def make_item_stack(self, identifier: str, count: int) -> ItemStack:
        return ItemStack(identifier, count)

    def as_player(self, sender) -> Player | None:
        return sender if isinstance(sender, Player) else None

    def on_command(self, sender: CommandSender, command: Command, args: list[str]) -> bool:
        """Route item set commands to their command tree"""
        try:
            if has_entity_selector(args):
                sender.send_message("§cSelector must be player-type")
                return False

            if command.name == "itemsets":
                return itemsets_command.handler(self, sender, args)

            router = self.routers.get(command.name)
            if router is None:
                sender.send_message(f"Command '{command.name}' not found")
                return False

            return router.dispatch(self, sender, args) == SUCCESS

        except Exception as e:
            def clean_traceback(tb):
                cleaned_lines = []
                for line in tb.splitlines():
                    if 'File "' in line:
                        path_start = line.find('"') + 1
                        path_end = line.find('"', path_start)
                        file_path = line[path_start:path_end]
                        line = line.replace(file_path, f"<hidden>/{os.path.basename(file_path)}")
                    cleaned_lines.append(line)
                return "\n".join(cleaned_lines)

            print(
                f"[ItemSets] Command /{command.name} {args} failed: {e}\n"
                + clean_traceback(traceback.format_exc())
            )
            sender.send_error_message("§cAn unexpected error occurred.")
            return False
