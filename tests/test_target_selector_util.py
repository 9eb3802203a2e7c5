import pytest

from endstone_itemsets.utils.errors import PlayerNotFoundError
from endstone_itemsets.utils.target_selector_util import has_entity_selector, resolve_player

from conftest import FakePlayer, FakeSender


def test_exact_name_is_case_insensitive(plugin, server):
    steve = server.join(FakePlayer("Steve"))
    server.join(FakePlayer("Steven"))

    assert resolve_player(plugin, "steve", None) is steve


def test_partial_names_are_not_found(plugin, bob, alice):
    for partial in ("Bo", "Ali", "bobb"):
        with pytest.raises(PlayerNotFoundError):
            resolve_player(plugin, partial, None)


def test_quoted_names_are_unwrapped(plugin, server):
    spaced = server.join(FakePlayer("Cool Guy"))

    assert resolve_player(plugin, '"Cool Guy"', None) is spaced


def test_self_selector_needs_a_player(plugin, alice):
    assert resolve_player(plugin, "@s", alice) is alice

    with pytest.raises(PlayerNotFoundError):
        resolve_player(plugin, "@s", FakeSender())


def test_nearest_selector_uses_sender_location(plugin, server):
    near = server.join(FakePlayer("Near", location=(3.0, 64.0, 4.0)))
    server.join(FakePlayer("Far", location=(300.0, 64.0, -120.0)))
    sender = server.join(FakePlayer("Steve", op=True, location=(300.0, 60.0, -118.0)))

    assert resolve_player(plugin, "@p", sender) is sender
    server.online_players.remove(sender)
    assert resolve_player(plugin, "@p", sender).name == "Far"
    assert resolve_player(plugin, "@p", FakeSender()) is near


def test_nearest_and_random_need_someone_online(plugin):
    for selector in ("@p", "@r"):
        with pytest.raises(PlayerNotFoundError):
            resolve_player(plugin, selector, FakeSender())


def test_random_selector_picks_an_online_player(plugin, alice, bob):
    assert resolve_player(plugin, "@r", FakeSender()) in (alice, bob)


def test_selectors_matching_several_players_are_not_found(plugin, alice, bob):
    with pytest.raises(PlayerNotFoundError):
        resolve_player(plugin, "@a", FakeSender())


def test_all_selector_with_one_player_online_resolves(plugin, alice):
    assert resolve_player(plugin, "@a", FakeSender()) is alice


def test_selector_arguments_are_not_supported(plugin, alice):
    with pytest.raises(PlayerNotFoundError):
        resolve_player(plugin, "@p[name=Alice]", FakeSender())


def test_entity_selectors_are_detected():
    assert has_entity_selector(["@e[type=cow]"])
    assert not has_entity_selector(["@s", "Bob"])
