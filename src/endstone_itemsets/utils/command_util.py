ELEVATED_PERMISSION = "itemsets.operator"
AUDIT_PERMISSION = "itemsets.audit"


def command_key(command_name: str) -> str:
    """Bedrock only registers lower-case command names."""
    return command_name.strip().lower()


def command_permission(command_name: str) -> str:
    return f"itemsets.command.{command_key(command_name)}"


def create_command(command_name: str, description: str, usages: list, permissions: list = None,
                   default: str = "true", aliases: list = None):
    name = command_key(command_name)
    if not permissions:
        permissions = [command_permission(name)]

    command = {
        name: {
            "description": description,
            "usages": usages,
            "permissions": permissions,
            "aliases": aliases if aliases else []
        }
    }

    # Endstone permission
    permission = {
        permissions[0]: {
            "description": f"Allows use of the /{name} command",
            "default": default
        }
    }

    return command, permission


def is_elevated(sender) -> bool:
    """Operator tier: may bypass one-use gating and target other players."""
    return bool(sender.has_permission(ELEVATED_PERMISSION))
