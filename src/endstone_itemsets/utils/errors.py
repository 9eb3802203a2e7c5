class ItemSetsError(Exception):
    """Base error for item set commands."""


class PlayerNotFoundError(ItemSetsError):
    def __init__(self, selector: str = ""):
        self.selector = selector
        super().__init__(f"No player was found for '{selector}'" if selector else "No player was found")


class GrantFailure(ItemSetsError):
    """Raised when the server rejects one of the items of a set."""

    def __init__(self, command_name: str, identifier: str, cause: Exception):
        self.command_name = command_name
        self.identifier = identifier
        self.cause = cause
        super().__init__(str(cause) or f"could not give '{identifier}'")
