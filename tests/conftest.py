"""
Fake server objects standing in for the Endstone host in unit tests.
"""
from types import SimpleNamespace

import pytest

from endstone_itemsets.commands import build_commands
from endstone_itemsets.utils import config_util
from endstone_itemsets.utils.command_util import ELEVATED_PERMISSION, AUDIT_PERMISSION
from endstone_itemsets.utils.config_util import ItemEntry, ItemSet
from endstone_itemsets.utils.db_util import UsageDB
from endstone_itemsets.utils.usage_gate import UsageGate


class FakeInventory:
    def __init__(self):
        self.items = []

    def add_item(self, stack):
        self.items.append(stack)


class FakeSender:
    def __init__(self, name="Server", permissions=None):
        self.name = name
        self.permissions = set(permissions or ())
        self.messages = []
        self.errors = []

    def has_permission(self, permission):
        return permission in self.permissions

    def send_message(self, message):
        self.messages.append(message)

    def send_error_message(self, message):
        self.errors.append(message)


class FakePlayer(FakeSender):
    def __init__(self, name, xuid="", op=False, location=(0.0, 0.0, 0.0)):
        super().__init__(name, {ELEVATED_PERMISSION, AUDIT_PERMISSION} if op else set())
        self.xuid = xuid
        self.inventory = FakeInventory()
        self.location = SimpleNamespace(x=location[0], y=location[1], z=location[2])


class FakeServer:
    def __init__(self):
        self.online_players = []
        self.broadcasts = []

    def broadcast_message(self, message):
        self.broadcasts.append(message)

    def join(self, player):
        self.online_players.append(player)
        return player


class FakePlugin:
    """Mirrors the attributes ItemSets exposes to command handlers."""

    def __init__(self, server, usage_gate, item_sets):
        self.server = server
        self.usage_gate = usage_gate
        self.bad_items = set()
        _, _, self.routers, self.item_sets = build_commands(item_sets)

    def make_item_stack(self, identifier, count):
        if identifier in self.bad_items:
            raise ValueError(f"Unknown item: {identifier}")
        return identifier, count

    def as_player(self, sender):
        return sender if isinstance(sender, FakePlayer) else None


@pytest.fixture(autouse=True)
def data_folder(tmp_path, monkeypatch):
    monkeypatch.setattr(config_util, "_data_folder", None)
    monkeypatch.setattr(config_util, "cache", None)
    config_util.set_data_folder(str(tmp_path / "itemsets_data"))
    yield tmp_path / "itemsets_data"


@pytest.fixture
def starter_set():
    return ItemSet("giveItemSet1", False, [
        ItemEntry("minecraft:stone_sword"),
        ItemEntry("minecraft:stone_pickaxe"),
    ])


@pytest.fixture
def one_use_set():
    return ItemSet("giveItemSet2", True, [
        ItemEntry("minecraft:iron_ingot", 32),
        ItemEntry("minecraft:gold_ingot", 16),
        ItemEntry("minecraft:diamond", 8),
    ])


@pytest.fixture
def usage_db(tmp_path):
    db = UsageDB(str(tmp_path / "usage.db"))
    yield db
    db.close_connection()


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def plugin(server, usage_db, starter_set, one_use_set):
    return FakePlugin(server, UsageGate(usage_db), [starter_set, one_use_set])


@pytest.fixture
def alice(server):
    return server.join(FakePlayer("Alice", xuid="2535400000000001"))


@pytest.fixture
def bob(server):
    return server.join(FakePlayer("Bob", xuid="2535400000000002"))


@pytest.fixture
def op(server):
    return server.join(FakePlayer("Steve", xuid="2535400000000003", op=True))
