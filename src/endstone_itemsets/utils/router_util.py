from dataclasses import dataclass, field
from typing import Callable

PLACEHOLDER_PREFIX = "<"

SUCCESS = 1
FAILURE = 0


@dataclass
class Route:
    """One leaf of a command tree: `("<player>", "clear")` matches `Steve clear`."""
    pattern: tuple
    handler: Callable
    requires: Callable = None
    usage: str = ""

    def match(self, args: list[str]) -> dict | None:
        if len(args) != len(self.pattern):
            return None

        captured = {}
        for token, arg in zip(self.pattern, args):
            if token.startswith(PLACEHOLDER_PREFIX):
                captured[token.strip("<>")] = arg
            elif token.lower() != arg.lower():
                return None
        return captured

    def allowed(self, sender) -> bool:
        return self.requires is None or bool(self.requires(sender))


@dataclass
class CommandRouter:
    name: str
    routes: list[Route] = field(default_factory=list)

    def add(self, pattern: tuple, handler: Callable, requires: Callable = None, usage: str = "") -> "CommandRouter":
        self.routes.append(Route(tuple(pattern), handler, requires, usage))
        return self

    def usages(self, sender=None) -> list[str]:
        return [route.usage for route in self.routes if route.usage and (sender is None or route.allowed(sender))]

    def dispatch(self, plugin, sender, args: list[str]) -> int:
        for route in self.routes:
            captured = route.match(args)
            if captured is None:
                continue
            if not route.allowed(sender):
                sender.send_error_message("§cYou do not have permission to use this form of the command")
                return FAILURE
            return route.handler(plugin, sender, **captured)

        usages = self.usages(sender)
        sender.send_error_message("§cUsage: " + (" | ".join(usages) if usages else f"/{self.name}"))
        return FAILURE
