"""Browser session with runtime-extensible commands."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from uuid_extensions import uuid7str

from browser_dispatch.browser.cdp import CDPTransport
from browser_dispatch.browser.element import Element, is_element_attribute
from browser_dispatch.browser.transport import Transport
from browser_dispatch.browser.views import BrowserConfig
from browser_dispatch.commands import BoundCommand, CommandRegistry, CommandScope, CommandTable, RegisteredCommand, resolve_command
from browser_dispatch.commands.registry import validate_command_name

BROWSER_COMMANDS = CommandTable(CommandScope.BROWSER)


class Browser:
	"""Root automation handle for one remote browser connection.

	Custom commands are added at runtime and looked up on every attribute
	access, so they can shadow built-ins and can be added at any time:
	```python
	browser = await remote({'cdp_url': 'http://localhost:9222'})


	async def get_heading(browser):
		return await browser.execute('return document.querySelector("h1").innerText')


	browser.register('get_heading', get_heading)
	print(await browser.get_heading())
	```

	Commands registered with `element_scope=True` also resolve on every
	element this browser produces, including ones located before the
	registration and elements located from other elements.
	"""

	is_multiremote = False

	def __init__(self, transport: Transport, config: BrowserConfig | None = None, id: str | None = None) -> None:
		self.id = id or uuid7str()
		self.config = config or BrowserConfig()
		self.transport = transport
		self.registry = CommandRegistry()
		if self.config.log_level:
			self.logger.setLevel(self.config.log_level)

	@property
	def logger(self) -> logging.Logger:
		return logging.getLogger(f'browser_dispatch.{self}')

	def _resolve(self, name: str) -> RegisteredCommand | None:
		registry = self.__dict__.get('registry')
		if registry is None:
			return None
		return resolve_command(name, registry.browser_commands, BROWSER_COMMANDS)

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

	def register(self, name: str, function: Callable[..., Any], element_scope: bool = False) -> RegisteredCommand:
		"""Add a custom command.

		Args:
			name: Attribute name the command is reachable under
			function: Sync or async callable, called with this browser (or the
				element it runs on) as first argument
			element_scope: Also resolve the command on every element of this browser
		"""
		validate_command_name(name)
		if name in dir(type(self)) or name in vars(self):
			raise ValueError(f'Command name {name!r} clashes with an attribute of {type(self).__name__}')
		if element_scope and is_element_attribute(name):
			raise ValueError(f'Command name {name!r} clashes with an attribute of Element')
		return self.registry.register(name, function, element_scope=element_scope)

	def command(self, name: str | None = None, element_scope: bool = False):
		"""Decorator form of register()"""

		def decorator(func: Callable[..., Any]):
			self.register(name or func.__name__, func, element_scope=element_scope)
			return func

		return decorator

	async def locate(self, selector: str) -> Element:
		return await self._locate(selector, parent=None)

	async def locate_all(self, selector: str) -> list[Element]:
		return await self._locate_all(selector, parent=None)

	async def _locate(self, selector: str, parent: Element | None) -> Element:
		parent_id = parent._require_element_id() if parent is not None else None
		element_id = await self.transport.find_element(selector, parent_id)
		if element_id is None:
			self.logger.debug(f'No element matched {selector!r}')
		return Element(selector, browser=self, element_id=element_id, parent=parent)

	async def _locate_all(self, selector: str, parent: Element | None) -> list[Element]:
		parent_id = parent._require_element_id() if parent is not None else None
		element_ids = await self.transport.find_elements(selector, parent_id)
		return [
			Element(selector, browser=self, element_id=element_id, index=index, parent=parent)
			for index, element_id in enumerate(element_ids)
		]

	async def close(self) -> None:
		self.logger.debug('Closing transport')
		await self.transport.close()

	def __str__(self) -> str:
		return f'Browser🅑 {self.id[-4:]}'

	def __repr__(self) -> str:
		return f'<Browser {self.id[-4:]} transport={self.transport!r}>'


@BROWSER_COMMANDS.command(builtin=True)
async def execute(browser: Browser, script: str, *args: Any) -> Any:
	"""Run a JavaScript function body in the page; `args` are available as `arguments`"""
	return await browser.transport.execute_script(script, args)


@BROWSER_COMMANDS.command(builtin=True)
async def navigate(browser: Browser, url: str) -> None:
	browser.logger.info(f'🔗 Navigating to {url}')
	await browser.transport.navigate(url)


@BROWSER_COMMANDS.command(builtin=True)
async def get_url(browser: Browser) -> str:
	return await browser.transport.execute_script('return window.location.href;')


@BROWSER_COMMANDS.command(builtin=True)
async def get_title(browser: Browser) -> str:
	return await browser.transport.execute_script('return document.title;')


@BROWSER_COMMANDS.command(builtin=True)
async def pause(browser: Browser, seconds: float) -> None:
	await asyncio.sleep(seconds)


async def remote(config: BrowserConfig | dict[str, Any] | None = None, *, transport: Transport | None = None) -> Browser:
	"""Create a Browser, connecting over CDP unless a transport is given."""
	if isinstance(config, dict):
		config = BrowserConfig.model_validate(config)
	config = config or BrowserConfig()

	if transport is None:
		transport = await CDPTransport.connect(config.cdp_url, headers=config.headers)

	browser = Browser(transport, config=config)
	browser.logger.debug(f'Session ready on {transport!r}')
	return browser
