import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from browser_dispatch.browser.transport import ElementId
from browser_dispatch.browser.views import NoSuchElementError
from browser_dispatch.commands import BoundCommand, CommandScope, CommandTable, RegisteredCommand, resolve_command
from browser_dispatch.commands.registry import validate_command_name

if TYPE_CHECKING:
	from browser_dispatch.browser.session import Browser

logger = logging.getLogger(__name__)

ELEMENT_COMMANDS = CommandTable(CommandScope.ELEMENT)


class Element:
	"""Handle to a node located through a Browser.

	Commands resolve in this order: the element's own commands, then the root
	browser's element-scoped commands (read at call time), then the built-ins.
	Elements located from this element are wired to the same root browser.
	"""

	def __init__(
		self,
		selector: str,
		browser: 'Browser',
		element_id: ElementId | None = None,
		index: int | None = None,
		parent: 'Element | None' = None,
	) -> None:
		self.selector = selector
		self.index = index
		self.element_id = element_id
		self.parent = parent
		self.browser = browser
		self.own_commands = CommandTable(CommandScope.ELEMENT)

	def _resolve(self, name: str) -> RegisteredCommand | None:
		own_commands = self.__dict__.get('own_commands')
		browser = self.__dict__.get('browser')
		if own_commands is None or browser is None:
			return None
		return resolve_command(name, own_commands, browser.registry.element_commands, ELEMENT_COMMANDS)

	def __getattr__(self, name: str) -> BoundCommand:
		if name.startswith('_'):
			raise AttributeError(name)
		command = self._resolve(name)
		if command is None:
			raise AttributeError(f"'{type(self).__name__}' object has no command '{name}'")
		return BoundCommand(self, command)

	def has_command(self, name: str) -> bool:
		return self._resolve(name) is not None

	async def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
		"""Run the command `name` the same way attribute access would resolve it."""
		command = self._resolve(name)
		if command is None:
			raise AttributeError(f"'{type(self).__name__}' object has no command '{name}'")
		return await BoundCommand(self, command)(*args, **kwargs)

	def register(self, name: str, function: Callable[..., Any]) -> RegisteredCommand:
		"""Add a command to this exact element only.

		Siblings, the browser, and elements located again with the same
		selector do not see it.
		"""
		validate_command_name(name)
		if is_element_attribute(name) or name in vars(self):
			raise ValueError(f'Command name {name!r} clashes with an attribute of {type(self).__name__}')
		if not callable(function):
			raise TypeError(f'Command {name!r} must be callable, got {type(function).__name__}')

		command = self.own_commands.add(RegisteredCommand(name=name, function=function, scope=CommandScope.ELEMENT))
		logger.debug(f'Registered command {name!r} on {self!r}')
		return command

	def command(self, name: str | None = None):
		def decorator(func: Callable[..., Any]):
			self.register(name or func.__name__, func)
			return func

		return decorator

	async def locate(self, selector: str) -> 'Element':
		return await self.browser._locate(selector, parent=self)

	async def locate_all(self, selector: str) -> list['Element']:
		return await self.browser._locate_all(selector, parent=self)

	def _require_element_id(self) -> ElementId:
		if self.element_id is None:
			raise NoSuchElementError(self.selector)
		return self.element_id

	def __repr__(self) -> str:
		index = f'[{self.index}]' if self.index is not None else ''
		return f'<Element {self.selector!r}{index} of {self.browser}>'


ELEMENT_INSTANCE_ATTRIBUTES = frozenset({'selector', 'index', 'element_id', 'parent', 'browser', 'own_commands'})


def is_element_attribute(name: str) -> bool:
	"""True if attribute access on an Element would never reach a command called `name`."""
	return name in ELEMENT_INSTANCE_ATTRIBUTES or name in dir(Element)


async def _run_on_element(element: Element, script: str, *args: Any) -> Any:
	return await element.browser.transport.execute_script(script, args, element_id=element._require_element_id())


@ELEMENT_COMMANDS.command(builtin=True)
async def execute(element: Element, script: str, *args: Any) -> Any:
	"""Run a JavaScript function body in the page, like Browser.execute"""
	return await element.browser.transport.execute_script(script, args)


@ELEMENT_COMMANDS.command(builtin=True)
async def is_existing(element: Element) -> bool:
	return element.element_id is not None


@ELEMENT_COMMANDS.command(builtin=True)
async def get_text(element: Element) -> str:
	return await _run_on_element(element, 'return this.innerText;')


@ELEMENT_COMMANDS.command(builtin=True)
async def get_attribute(element: Element, attribute: str) -> str | None:
	return await _run_on_element(element, 'return this.getAttribute(arguments[0]);', attribute)


@ELEMENT_COMMANDS.command(builtin=True)
async def get_value(element: Element) -> Any:
	return await _run_on_element(element, 'return this.value;')


@ELEMENT_COMMANDS.command(builtin=True)
async def set_value(element: Element, value: str) -> None:
	await _run_on_element(
		element,
		"this.value = arguments[0]; this.dispatchEvent(new Event('input', {bubbles: true}));",
		value,
	)


@ELEMENT_COMMANDS.command(builtin=True)
async def click(element: Element) -> None:
	await _run_on_element(element, 'this.click();')
