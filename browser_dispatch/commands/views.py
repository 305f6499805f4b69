import inspect
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class CommandScope(str, Enum):
	"""Where a command registered on a browser can be resolved"""

	BROWSER = 'browser'
	ELEMENT = 'element'


class RegisteredCommand(BaseModel):
	"""Model representing a registered command.

	The function is always called with the browser or element it was resolved
	on as its first positional argument.
	"""

	model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

	name: str
	function: Callable[..., Any]
	scope: CommandScope = CommandScope.BROWSER
	builtin: bool = False

	@property
	def is_async(self) -> bool:
		return inspect.iscoroutinefunction(self.function)

	def __repr__(self) -> str:
		kind = 'builtin' if self.builtin else 'custom'
		return f'<RegisteredCommand {self.name!r} {kind} scope={self.scope.value}>'
