"""Drive several independent browser sessions through one API surface."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from browser_dispatch.browser import BROWSER_COMMANDS, ELEMENT_COMMANDS, Browser, BrowserConfig, Element, remote
from browser_dispatch.commands import CommandScope, CommandTable, RegisteredCommand, resolve_command, validate_command_name
from browser_dispatch.multiremote.views import MultiRemoteError

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str, BrowserConfig], Awaitable[Browser]]


async def _gather_instances(command: str, calls: dict[str, Awaitable[Any]]) -> dict[str, Any]:
	"""Await one call per instance concurrently and wait until all have settled.

	Raises MultiRemoteError carrying every failure once all calls are done.
	"""
	labels = list(calls)
	results = await asyncio.gather(*calls.values(), return_exceptions=True)

	errors: dict[str, BaseException] = {}
	for label, result in zip(labels, results):
		if isinstance(result, BaseException):
			logger.error(f'❌ {command} failed on {label}: {type(result).__name__}: {result}')
			errors[label] = result

	if errors:
		error = MultiRemoteError(command, errors)
		raise error from error.first_error
	return dict(zip(labels, results))


class FanOutCommand:
	"""Callable returned for a command name on a multiremote object."""

	__slots__ = ('owner', 'name')

	def __init__(self, owner: 'MultiRemoteBrowser | MultiRemoteElement', name: str) -> None:
		self.owner = owner
		self.name = name

	@property
	def __name__(self) -> str:
		return self.name

	def __call__(self, *args: Any, **kwargs: Any):
		return self.owner.invoke(self.name, *args, **kwargs)

	def __repr__(self) -> str:
		return f'<fan-out command {self.name} of {self.owner!r}>'


class MultiRemoteElement:
	"""The result of locating one selector on every instance.

	`mr_element.<label>` is the plain Element of that instance; any other name
	fans out if every underlying element resolves it.
	"""

	def __init__(self, selector: str, elements: dict[str, Element]) -> None:
		self.selector = selector
		self._elements = elements

	@property
	def instances(self) -> list[str]:
		return list(self._elements)

	def __getattr__(self, name: str) -> Any:
		if name.startswith('_'):
			raise AttributeError(name)
		elements = self.__dict__.get('_elements', {})
		if name in elements:
			return elements[name]
		if self.has_command(name):
			return FanOutCommand(self, name)
		raise AttributeError(f"'{type(self).__name__}' object has no instance or command '{name}'")

	def has_command(self, name: str) -> bool:
		elements = self.__dict__.get('_elements', {})
		return bool(elements) and all(element.has_command(name) for element in elements.values())

	async def invoke(self, name: str, *args: Any, **kwargs: Any) -> list[Any]:
		if not self.has_command(name):
			raise AttributeError(f"'{type(self).__name__}' object has no command '{name}'")
		results = await _gather_instances(
			name, {label: element.invoke(name, *args, **kwargs) for label, element in self._elements.items()}
		)
		return list(results.values())

	async def locate(self, selector: str) -> 'MultiRemoteElement':
		elements = await _gather_instances('locate', {label: element.locate(selector) for label, element in self._elements.items()})
		return MultiRemoteElement(selector, elements)

	def __repr__(self) -> str:
		return f'<MultiRemoteElement {self.selector!r} instances={self.instances}>'


class MultiRemoteBrowser:
	"""Aggregate over independently driven Browser instances.

	Attribute resolution: instance label, then commands registered on the
	aggregate, then browser built-ins. Commands fan out to every instance
	concurrently and return a list ordered like the declared instances:
	```python
	browser = await multiremote({'chrome': {...}, 'edge': {...}})
	titles = await browser.get_title()  # [chrome_title, edge_title]
	await browser.chrome.navigate('https://example.com')  # one instance only
	```
	If any instance fails, the call still waits for the others and then
	raises MultiRemoteError with all failures attached.
	"""

	is_multiremote = True

	def __init__(self, instances: Mapping[str, Browser]) -> None:
		if not instances:
			raise ValueError('MultiRemoteBrowser needs at least one instance')
		for label in instances:
			validate_instance_label(label)
		self._instances: dict[str, Browser] = dict(instances)
		self.aggregate_commands = CommandTable(CommandScope.BROWSER)

	@property
	def instances(self) -> list[str]:
		return list(self._instances)

	def instance(self, label: str) -> Browser:
		try:
			return self._instances[label]
		except KeyError:
			raise KeyError(f'Unknown multiremote instance {label!r}, expected one of {self.instances}') from None

	def _resolve(self, name: str) -> RegisteredCommand | None:
		aggregate_commands = self.__dict__.get('aggregate_commands')
		if aggregate_commands is None:
			return None
		return resolve_command(name, aggregate_commands, BROWSER_COMMANDS)

	def __getattr__(self, name: str) -> Any:
		if name.startswith('_'):
			raise AttributeError(name)
		instances = self.__dict__.get('_instances', {})
		if name in instances:
			return instances[name]
		if self._resolve(name) is not None:
			return FanOutCommand(self, name)
		raise AttributeError(f"'{type(self).__name__}' object has no instance or command '{name}'")

	def has_command(self, name: str) -> bool:
		return self._resolve(name) is not None

	def register(self, name: str, function: Callable[..., Any]) -> RegisteredCommand:
		"""Register a browser-scope command on every instance and on the aggregate.

		To add a command to one instance only, register it on that instance:
		`browser.<label>.register(...)`.
		"""
		validate_command_name(name)
		if name in self._instances:
			raise ValueError(f'Command name {name!r} clashes with a multiremote instance label')
		if name in dir(type(self)) or name in vars(self):
			raise ValueError(f'Command name {name!r} clashes with an attribute of {type(self).__name__}')

		for browser in self._instances.values():
			browser.register(name, function)
		command = self.aggregate_commands.add(RegisteredCommand(name=name, function=function))
		logger.debug(f'Registered multiremote command {name!r} on {self.instances}')
		return command

	def command(self, name: str | None = None):
		def decorator(func: Callable[..., Any]):
			self.register(name or func.__name__, func)
			return func

		return decorator

	async def invoke(self, name: str, *args: Any, **kwargs: Any) -> list[Any]:
		if self._resolve(name) is None:
			raise AttributeError(f"'{type(self).__name__}' object has no command '{name}'")
		results = await _gather_instances(
			name, {label: browser.invoke(name, *args, **kwargs) for label, browser in self._instances.items()}
		)
		return list(results.values())

	async def locate(self, selector: str) -> MultiRemoteElement:
		elements = await _gather_instances('locate', {label: browser.locate(selector) for label, browser in self._instances.items()})
		return MultiRemoteElement(selector, elements)

	async def close(self) -> None:
		await _gather_instances('close', {label: browser.close() for label, browser in self._instances.items()})

	def __repr__(self) -> str:
		return f'<MultiRemoteBrowser instances={self.instances}>'


_INSTANCE_ATTRIBUTES = {'aggregate_commands', 'selector'}


def validate_instance_label(label: Any) -> str:
	if not isinstance(label, str) or not label.isidentifier() or label.startswith('_'):
		raise ValueError(f'Multiremote instance label must be a public Python identifier, got {label!r}')
	reserved = set(dir(MultiRemoteBrowser)) | set(dir(MultiRemoteElement)) | _INSTANCE_ATTRIBUTES
	if label in reserved or label in BROWSER_COMMANDS or label in ELEMENT_COMMANDS:
		raise ValueError(f'Multiremote instance label {label!r} clashes with a built-in attribute or command')
	return label


async def _default_session_factory(label: str, config: BrowserConfig) -> Browser:
	return await remote(config)


async def multiremote(
	configs: Mapping[str, BrowserConfig | dict[str, Any]],
	*,
	session_factory: SessionFactory | None = None,
) -> MultiRemoteBrowser:
	"""Start one Browser per label concurrently and wrap them in a MultiRemoteBrowser.

	Args:
		configs: Instance label to session config, in the order instances should be reported
		session_factory: Coroutine function creating a Browser from (label, config); defaults to remote()
	"""
	if not configs:
		raise ValueError('multiremote needs at least one instance config')
	for label in configs:
		validate_instance_label(label)

	factory = session_factory or _default_session_factory
	parsed = {
		label: config if isinstance(config, BrowserConfig) else BrowserConfig.model_validate(config)
		for label, config in configs.items()
	}

	labels = list(parsed)
	results = await asyncio.gather(*(factory(label, config) for label, config in parsed.items()), return_exceptions=True)
	failures = [(label, result) for label, result in zip(labels, results) if isinstance(result, BaseException)]

	if failures:
		for label, result in zip(labels, results):
			if isinstance(result, BaseException):
				continue
			try:
				await result.close()
			except Exception as e:
				logger.warning(f'Error closing session {label}: {e}')
		label, error = failures[0]
		logger.error(f'❌ Failed to start multiremote instance {label}: {type(error).__name__}: {error}')
		raise error

	logger.info(f'🌐 Multiremote session started with instances {labels}')
	return MultiRemoteBrowser(dict(zip(labels, results)))
