import json
import os
from collections import OrderedDict
from dataclasses import dataclass, field

from endstone_itemsets.utils.command_util import command_key

DATA_FOLDER_NAME = "itemsets_data"
USAGE_CATEGORY = "itemCommands"

DEFAULT_ITEM_SETS = [
    [
        {"command": "giveItemSet1"},
        {"id": "minecraft:stone_sword"},
        {"id": "minecraft:stone_pickaxe"},
        {"id": "minecraft:stone_axe"},
        {"id": "minecraft:stone_shovel"}
    ],
    [
        {"command": "giveItemSet2", "oneUse": True},
        {"id": "minecraft:iron_ingot", "count": 32},
        {"id": "minecraft:gold_ingot", "count": 16},
        {"id": "minecraft:diamond", "count": 8}
    ]
]

DEFAULT_MODULES = OrderedDict({
    "broadcasts": OrderedDict({
        "grant_messages": True,
        "clear_messages": True
    }),
    "discord_logging": OrderedDict({
        "embed": OrderedDict({
            "title": "Item Sets",
            "color": 781919
        }),
        "grants": OrderedDict({
            "enabled": False,
            "webhook": ""
        }),
        "resets": OrderedDict({
            "enabled": False,
            "webhook": ""
        })
    })
})

cache = None
_data_folder = None


@dataclass
class ItemEntry:
    identifier: str
    count: int = 1


@dataclass
class ItemSet:
    command: str
    one_use: bool = False
    items: list[ItemEntry] = field(default_factory=list)

    @property
    def key(self) -> str:
        return command_key(self.command)


def find_server_root(start_path: str = None) -> str:
    """Walk up to the folder holding both `plugins` and `worlds`, or fall back to the working directory."""
    current_dir = os.path.abspath(start_path or os.path.dirname(__file__))
    while True:
        if os.path.exists(os.path.join(current_dir, 'plugins')) and os.path.exists(os.path.join(current_dir, 'worlds')):
            return current_dir
        parent = os.path.dirname(current_dir)
        if parent == current_dir:
            return os.getcwd()
        current_dir = parent


def get_data_folder() -> str:
    global _data_folder
    if _data_folder is None:
        _data_folder = os.path.join(find_server_root(), 'plugins', DATA_FOLDER_NAME)
        os.makedirs(_data_folder, exist_ok=True)
    return _data_folder


def set_data_folder(path: str) -> None:
    """Point the plugin at another data folder and drop the cached config."""
    global _data_folder, cache
    os.makedirs(path, exist_ok=True)
    _data_folder = path
    cache = None


def get_config_path() -> str:
    return os.path.join(get_data_folder(), 'config.json')


def default_config() -> OrderedDict:
    return OrderedDict({
        "item_sets": json.loads(json.dumps(DEFAULT_ITEM_SETS)),
        "modules": json.loads(json.dumps(DEFAULT_MODULES), object_pairs_hook=OrderedDict)
    })


def load_config():
    """Load or create plugins/itemsets_data/config.json, cached in memory."""
    global cache
    if cache is not None:
        return cache

    config_path = get_config_path()
    if not os.path.exists(config_path):
        cache = default_config()
        save_config(cache)
        return cache

    try:
        content = read_text(config_path)
        if content:
            cache = json.loads(content, object_pairs_hook=OrderedDict)
        else:
            cache = default_config()
            save_config(cache)
    except (OSError, json.JSONDecodeError) as e:
        print(f"[ItemSets] config.json could not be read ({e}), using defaults")
        cache = default_config()
        save_config(cache)

    return cache


def save_config(config: dict, update_cache: bool = False) -> None:
    global cache
    if update_cache:
        cache = config

    text = json.dumps(config, indent=4)
    write_text(get_config_path(), text)


def preload_settings():
    """Add missing top-level sections with defaults, never overwriting what the owner already set."""
    config = load_config()

    changed = False
    if "item_sets" not in config or not isinstance(config["item_sets"], list):
        config["item_sets"] = json.loads(json.dumps(DEFAULT_ITEM_SETS))
        changed = True

    config.setdefault("modules", OrderedDict())
    for module, defaults in DEFAULT_MODULES.items():
        if module not in config["modules"]:
            config["modules"][module] = json.loads(json.dumps(defaults), object_pairs_hook=OrderedDict)
            changed = True

    if changed:
        try:
            save_config(config)
        except Exception as e:
            print(f"[ItemSets] Failed to save config.json: {e}. Existing file left untouched.")

    return config


def get_module(name: str) -> dict:
    return load_config().get("modules", {}).get(name, DEFAULT_MODULES.get(name, {}))


def parse_count(value) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 1
    return count if count >= 1 else 1


def parse_flag(value) -> bool:
    """Only real booleans or the strings "true"/"false" count; anything else is off."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def parse_item_set(definition) -> ItemSet | None:
    """Turn one `[{command, oneUse}, {id, count}, ...]` array into an ItemSet, or None when unusable."""
    if not isinstance(definition, list) or len(definition) < 2:
        return None

    header = definition[0]
    if not isinstance(header, dict) or not header.get("command"):
        return None

    items = []
    for entry in definition[1:]:
        if not isinstance(entry, dict) or not entry.get("id"):
            continue
        items.append(ItemEntry(str(entry["id"]), parse_count(entry.get("count", 1))))

    return ItemSet(str(header["command"]).strip(), parse_flag(header.get("oneUse", False)), items)


def parse_item_sets(raw) -> list[ItemSet]:
    item_sets = []
    seen = set()
    for definition in raw or []:
        item_set = parse_item_set(definition)
        if item_set is None or item_set.key in seen:
            continue
        seen.add(item_set.key)
        item_sets.append(item_set)
    return item_sets


def load_item_sets() -> list[ItemSet]:
    return parse_item_sets(load_config().get("item_sets", []))


def read_text(path: str) -> str | None:
    """Read a config file, accepting a BOM or a Latin-1 file saved by a Windows editor."""
    for enc in ("utf-8-sig", "latin-1"):
        try:
            with open(path, "r", encoding=enc) as f:
                return f.read()
        except UnicodeDecodeError:
            continue
        except FileNotFoundError:
            return None
    return None


def write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
