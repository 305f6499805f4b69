from browser_dispatch.browser.cdp import CDPTransport
from browser_dispatch.browser.element import ELEMENT_COMMANDS, Element
from browser_dispatch.browser.session import BROWSER_COMMANDS, Browser, remote
from browser_dispatch.browser.transport import ElementId, Transport
from browser_dispatch.browser.views import BrowserConfig, BrowserError, JavascriptError, NoSuchElementError

__all__ = [
	'BROWSER_COMMANDS',
	'ELEMENT_COMMANDS',
	'Browser',
	'BrowserConfig',
	'BrowserError',
	'CDPTransport',
	'Element',
	'ElementId',
	'JavascriptError',
	'NoSuchElementError',
	'Transport',
	'remote',
]
