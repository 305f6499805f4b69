"""
Shared fixtures for browser-dispatch tests.

FakeTransport stands in for a remote browser: every selector matches (unless
listed in `missing_selectors`), collection queries return three nodes, and
scripts return whatever `script_results` maps them to.
"""

import asyncio
from collections.abc import Sequence
from typing import Any

import pytest

from browser_dispatch import Browser, BrowserConfig, multiremote, remote


class FakeTransport:
	def __init__(self, script_results: dict[str, Any] | None = None, collection_size: int = 3):
		self.script_results = dict(script_results or {})
		self.collection_size = collection_size
		self.missing_selectors: set[str] = set()
		self.executed: list[tuple[str, tuple[Any, ...], int | None]] = []
		self.queries: list[tuple[str, int | None]] = []
		self.navigations: list[str] = []
		self.closed = False
		self._next_node_id = 100

	def _new_node_id(self) -> int:
		self._next_node_id += 1
		return self._next_node_id

	async def execute_script(self, script: str, args: Sequence[Any] = (), element_id: int | None = None) -> Any:
		await asyncio.sleep(0)
		self.executed.append((script, tuple(args), element_id))
		result = self.script_results.get(script)
		if isinstance(result, Exception):
			raise result
		if callable(result):
			return result(*args)
		return result

	async def find_element(self, selector: str, parent_id: int | None = None) -> int | None:
		self.queries.append((selector, parent_id))
		if selector in self.missing_selectors:
			return None
		return self._new_node_id()

	async def find_elements(self, selector: str, parent_id: int | None = None) -> list[int]:
		self.queries.append((selector, parent_id))
		if selector in self.missing_selectors:
			return []
		return [self._new_node_id() for _ in range(self.collection_size)]

	async def navigate(self, url: str) -> None:
		self.navigations.append(url)

	async def close(self) -> None:
		self.closed = True


@pytest.fixture
def fake_transport_class():
	return FakeTransport


@pytest.fixture
def transport():
	return FakeTransport(
		script_results={
			'return 1;': 1,
			"return 'foobar';": 'foobar',
			'return document.title;': 'Fake Page',
			'return window.location.href;': 'http://foobar.com/',
		}
	)


@pytest.fixture
async def browser(transport):
	browser = await remote({'cdp_url': 'http://foobar.com:9222'}, transport=transport)
	yield browser
	await browser.close()


MULTIREMOTE_CONFIG = {
	'browserA': {
		'log_level': 'debug',
		'capabilities': {'browserName': 'chrome'},
	},
	'browserB': {
		'log_level': 'debug',
		'cdp_url': 'http://localhost:4445',
		'capabilities': {'browserName': 'firefox'},
	},
}


class RecordingSessionFactory:
	"""Creates one FakeTransport-backed Browser per multiremote label."""

	def __init__(self):
		self.transports: dict[str, FakeTransport] = {}
		self.configs: dict[str, BrowserConfig] = {}

	async def __call__(self, label: str, config: BrowserConfig) -> Browser:
		transport = FakeTransport(
			script_results={
				"return 'foobar';": 'foobar',
				'return document.title;': f'title of {label}',
			}
		)
		self.transports[label] = transport
		self.configs[label] = config
		return await remote(config, transport=transport)


@pytest.fixture
def session_factory():
	return RecordingSessionFactory()


@pytest.fixture
async def multiremote_browser(session_factory):
	browser = await multiremote(MULTIREMOTE_CONFIG, session_factory=session_factory)
	yield browser
	await browser.close()
