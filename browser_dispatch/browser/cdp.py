"""Transport implementation over the Chrome DevTools Protocol."""

import json
import logging
from collections.abc import Sequence
from typing import Any, Self
from urllib.parse import urlparse, urlunparse

import httpx
from cdp_use import CDPClient

from browser_dispatch.browser.transport import ElementId
from browser_dispatch.browser.views import BrowserError, JavascriptError

logger = logging.getLogger(__name__)


async def resolve_websocket_url(cdp_url: str, headers: dict[str, str] | None = None) -> str:
	"""Turn an http(s) CDP endpoint into the browser's websocket debugger URL."""
	if cdp_url.startswith('ws'):
		return cdp_url

	parsed_url = urlparse(cdp_url)
	path = parsed_url.path.rstrip('/')
	if not path.endswith('/json/version'):
		path = path + '/json/version'

	url = urlunparse((parsed_url.scheme, parsed_url.netloc, path, parsed_url.params, parsed_url.query, parsed_url.fragment))

	async with httpx.AsyncClient() as client:
		version_info = await client.get(url, headers=headers or {})
		version_info.raise_for_status()
		logger.debug(f'Raw version info: {version_info.text}')
		return version_info.json()['webSocketDebuggerUrl']


def _raise_for_exception(result: dict[str, Any]) -> None:
	details = result.get('exceptionDetails')
	if not details:
		return
	exception = details.get('exception') or {}
	message = exception.get('description') or details.get('text') or 'Script execution failed'
	raise JavascriptError(message, details=details)


class CDPTransport:
	"""Talks to one page target through a flattened CDP session.

	Element ids are DOM node ids, valid until the document is replaced.
	"""

	def __init__(self, cdp_client: CDPClient, session_id: str, target_id: str) -> None:
		self.cdp_client = cdp_client
		self.session_id = session_id
		self.target_id = target_id
		self._root_node_id: int | None = None

		# Clicks, form submits and scripts can replace the document without navigate()
		self.cdp_client.register.DOM.documentUpdated(self._on_document_updated)

	@classmethod
	async def connect(cls, cdp_url: str, headers: dict[str, str] | None = None) -> Self:
		ws_url = await resolve_websocket_url(cdp_url, headers)
		logger.debug(f'🌎 Connecting to chromium-based browser via CDP: {ws_url}')

		cdp_client = CDPClient(ws_url, additional_headers=headers)
		await cdp_client.start()
		try:
			targets = await cdp_client.send.Target.getTargets()
			pages = [t for t in targets.get('targetInfos', []) if t.get('type') == 'page']
			if pages:
				target_id = pages[0]['targetId']
			else:
				created = await cdp_client.send.Target.createTarget(params={'url': 'about:blank'})
				target_id = created['targetId']

			attached = await cdp_client.send.Target.attachToTarget(params={'targetId': target_id, 'flatten': True})
		except Exception:
			await cdp_client.stop()
			raise

		logger.debug(f'Attached to target {target_id} (session {attached["sessionId"]})')
		return cls(cdp_client, session_id=attached['sessionId'], target_id=target_id)

	def _on_document_updated(self, event: dict[str, Any], session_id: str | None = None) -> None:
		if session_id is not None and session_id != self.session_id:
			return
		logger.debug(f'Document updated on {self!r}, dropping cached root node')
		self._root_node_id = None

	async def _document_node_id(self) -> int:
		if self._root_node_id is None:
			doc = await self.cdp_client.send.DOM.getDocument(params={'depth': 0}, session_id=self.session_id)
			self._root_node_id = doc['root']['nodeId']
		return self._root_node_id

	async def _query(self, method: str, selector: str, parent_id: ElementId | None) -> dict[str, Any]:
		query = getattr(self.cdp_client.send.DOM, method)
		if parent_id is not None:
			return await query(params={'nodeId': parent_id, 'selector': selector}, session_id=self.session_id)

		cached = self._root_node_id is not None
		root_id = await self._document_node_id()
		try:
			return await query(params={'nodeId': root_id, 'selector': selector}, session_id=self.session_id)
		except Exception as e:
			if not cached:
				raise
			# the documentUpdated event may not have arrived yet
			logger.debug(f'DOM.{method} failed on cached root {root_id}, refetching document: {type(e).__name__}: {e}')
			self._root_node_id = None
			root_id = await self._document_node_id()
			return await query(params={'nodeId': root_id, 'selector': selector}, session_id=self.session_id)

	async def execute_script(self, script: str, args: Sequence[Any] = (), element_id: ElementId | None = None) -> Any:
		if element_id is None:
			expression = f'(function() {{ {script} }}).apply(null, {json.dumps(list(args))})'
			result = await self.cdp_client.send.Runtime.evaluate(
				params={'expression': expression, 'returnByValue': True, 'awaitPromise': True},
				session_id=self.session_id,
			)
		else:
			resolved = await self.cdp_client.send.DOM.resolveNode(params={'nodeId': element_id}, session_id=self.session_id)
			object_id = resolved['object'].get('objectId')
			if not object_id:
				raise BrowserError(f'Could not resolve node {element_id}', details=dict(resolved))
			result = await self.cdp_client.send.Runtime.callFunctionOn(
				params={
					'objectId': object_id,
					'functionDeclaration': f'function() {{ {script} }}',
					'arguments': [{'value': arg} for arg in args],
					'returnByValue': True,
					'awaitPromise': True,
				},
				session_id=self.session_id,
			)

		_raise_for_exception(result)
		return result.get('result', {}).get('value')

	async def find_element(self, selector: str, parent_id: ElementId | None = None) -> ElementId | None:
		result = await self._query('querySelector', selector, parent_id)
		# CDP reports "no match" as node id 0
		return result.get('nodeId') or None

	async def find_elements(self, selector: str, parent_id: ElementId | None = None) -> list[ElementId]:
		result = await self._query('querySelectorAll', selector, parent_id)
		return list(result.get('nodeIds', []))

	async def navigate(self, url: str) -> None:
		nav_result = await self.cdp_client.send.Page.navigate(params={'url': url}, session_id=self.session_id)
		self._root_node_id = None
		if nav_result.get('errorText'):
			raise BrowserError(f'Navigation to {url} failed: {nav_result["errorText"]}', details=dict(nav_result))

	async def close(self) -> None:
		await self.cdp_client.stop()

	def __repr__(self) -> str:
		return f'<CDPTransport target={self.target_id[-4:]}>'
