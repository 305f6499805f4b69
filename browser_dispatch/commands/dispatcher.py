"""Command resolution and invocation shared by browsers and elements."""

import inspect
import logging
from typing import Any

from browser_dispatch.commands.registry import CommandTable
from browser_dispatch.commands.views import RegisteredCommand

logger = logging.getLogger(__name__)


def resolve_command(name: str, *tables: CommandTable) -> RegisteredCommand | None:
	"""Return the command from the first table that knows `name`."""
	for table in tables:
		command = table.get(name)
		if command is not None:
			return command
	return None


async def invoke_command(instance: Any, command: RegisteredCommand, *args: Any, **kwargs: Any) -> Any:
	"""Run `command` with `instance` as its execution context.

	Exceptions raised by the handler, synchronously or while awaiting, reach the
	caller as the same object.
	"""
	logger.debug(f'⚡ {instance!r}.{command.name}() {"(builtin)" if command.builtin else ""}'.rstrip())
	result = command.function(instance, *args, **kwargs)
	if inspect.isawaitable(result):
		result = await result
	return result


class BoundCommand:
	"""A resolved command bound to the instance it was looked up on."""

	__slots__ = ('instance', 'command')

	def __init__(self, instance: Any, command: RegisteredCommand) -> None:
		self.instance = instance
		self.command = command

	@property
	def __name__(self) -> str:
		return self.command.name

	def __call__(self, *args: Any, **kwargs: Any):
		return invoke_command(self.instance, self.command, *args, **kwargs)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, BoundCommand):
			return NotImplemented
		return self.instance is other.instance and self.command.function is other.command.function

	def __hash__(self) -> int:
		return hash((id(self.instance), id(self.command.function)))

	def __repr__(self) -> str:
		return f'<bound command {self.command.name} of {self.instance!r}>'
