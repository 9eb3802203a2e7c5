from endstone_itemsets.utils.db_util import player_key


class UsageGate:
    """Decides whether a one-use item command may run for a player.

    The store only needs ``get(key, command)``, ``put(key, command, value)``
    and ``remove(key, command)``; :class:`UsageDB` is the one the plugin uses.
    """

    def __init__(self, store):
        self.store = store

    def can_run(self, player, command_name: str, one_use: bool) -> bool:
        if not one_use:
            return True
        return not self.store.get(player_key(player), command_name)

    def has_run(self, player, command_name: str) -> bool:
        return bool(self.store.get(player_key(player), command_name))

    def mark_run(self, player, command_name: str) -> None:
        self.store.put(player_key(player), command_name, True)

    def clear_run(self, player, command_name: str) -> None:
        self.store.remove(player_key(player), command_name)
