from collections import OrderedDict

from endstone_itemsets.commands import itemsets as itemsets_command
from endstone_itemsets.commands.item_set import build_router, create_item_set_command
from endstone_itemsets.utils.command_util import ELEVATED_PERMISSION, AUDIT_PERMISSION
from endstone_itemsets.utils.config_util import ItemSet, load_item_sets, preload_settings

BASE_PERMISSIONS = {
    ELEVATED_PERMISSION: {
        "description": "Bypass one-use item sets and give or clear item sets for other players",
        "default": "op"
    },
    AUDIT_PERMISSION: {
        "description": "Receive item set grant and reset logs in chat",
        "default": "op"
    }
}


def build_commands(item_sets: list[ItemSet]):
    """Build the Endstone command/permission tables plus one router per item set."""
    commands = OrderedDict()
    permissions = OrderedDict(BASE_PERMISSIONS)
    routers = OrderedDict()
    sets_by_key = OrderedDict()

    commands.update(itemsets_command.command)
    permissions.update(itemsets_command.permission)

    for item_set in item_sets:
        if item_set.key in commands:
            print(f"[ItemSets] ✗ /{item_set.key} clashes with an existing command, skipped")
            continue

        command, permission = create_item_set_command(item_set)
        commands.update(command)
        permissions.update(permission)
        routers[item_set.key] = build_router(item_set)
        sets_by_key[item_set.key] = item_set

    return commands, permissions, routers, sets_by_key


def preload_commands():
    """Read config.json and register one command per item set before the plugin is instantiated."""
    preload_settings()
    commands, permissions, routers, sets_by_key = build_commands(load_item_sets())

    print("[ItemSets] Registering item set commands...")
    for key, item_set in sets_by_key.items():
        kind = "one use" if item_set.one_use else "unlimited"
        print(f"✓ {key} - {len(item_set.items)} items, {kind}")
    print(f"[ItemSets] Loaded {len(sets_by_key)} item sets\n")

    return commands, permissions, routers, sets_by_key
