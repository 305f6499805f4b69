import logging
from collections.abc import Callable, Iterator
from typing import Any

from browser_dispatch.commands.views import CommandScope, RegisteredCommand

logger = logging.getLogger(__name__)


def validate_command_name(name: Any) -> str:
	if not isinstance(name, str) or not name.isidentifier():
		raise ValueError(f'Command name must be a valid Python identifier, got {name!r}')
	if name.startswith('_'):
		raise ValueError(f'Command name must not start with an underscore, got {name!r}')
	return name


class CommandTable:
	"""Ordered mapping of command name to RegisteredCommand.

	Tables only grow: adding a name that already exists replaces the entry.
	"""

	def __init__(self, scope: CommandScope = CommandScope.BROWSER) -> None:
		self.scope = scope
		self._commands: dict[str, RegisteredCommand] = {}

	def add(self, command: RegisteredCommand) -> RegisteredCommand:
		if command.name in self._commands:
			logger.debug(f'Replacing {self.scope.value} command {command.name!r}')
		self._commands[command.name] = command
		return command

	def get(self, name: str) -> RegisteredCommand | None:
		return self._commands.get(name)

	def names(self) -> list[str]:
		return list(self._commands)

	def command(self, name: str | None = None, builtin: bool = False):
		"""Decorator for adding a function to this table"""

		def decorator(func: Callable[..., Any]):
			command_name = validate_command_name(name or func.__name__)
			self.add(RegisteredCommand(name=command_name, function=func, scope=self.scope, builtin=builtin))
			return func

		return decorator

	def __contains__(self, name: object) -> bool:
		return name in self._commands

	def __iter__(self) -> Iterator[str]:
		return iter(self._commands)

	def __len__(self) -> int:
		return len(self._commands)

	def __repr__(self) -> str:
		return f'<CommandTable {self.scope.value} {self.names()}>'


class CommandRegistry:
	"""Custom commands of one browser session.

	`element_commands` is shared by reference with every element the session
	produces, at any nesting depth, and is read at call time.
	"""

	def __init__(self) -> None:
		self.browser_commands = CommandTable(CommandScope.BROWSER)
		self.element_commands = CommandTable(CommandScope.ELEMENT)

	def register(self, name: str, function: Callable[..., Any], element_scope: bool = False) -> RegisteredCommand:
		validate_command_name(name)
		if not callable(function):
			raise TypeError(f'Command {name!r} must be callable, got {type(function).__name__}')

		scope = CommandScope.ELEMENT if element_scope else CommandScope.BROWSER
		command = RegisteredCommand(name=name, function=function, scope=scope)
		self.browser_commands.add(command)
		if element_scope:
			self.element_commands.add(command)

		logger.debug(f'Registered custom command {name!r} (scope={scope.value})')
		return command
