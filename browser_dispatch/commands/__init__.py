from browser_dispatch.commands.dispatcher import BoundCommand, invoke_command, resolve_command
from browser_dispatch.commands.registry import CommandRegistry, CommandTable, validate_command_name
from browser_dispatch.commands.views import CommandScope, RegisteredCommand

__all__ = [
	'BoundCommand',
	'CommandRegistry',
	'CommandScope',
	'CommandTable',
	'RegisteredCommand',
	'invoke_command',
	'resolve_command',
	'validate_command_name',
]
