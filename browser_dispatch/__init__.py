from browser_dispatch.config import CONFIG
from browser_dispatch.logging_config import setup_logging

if CONFIG.BROWSER_DISPATCH_SETUP_LOGGING:
	logger = setup_logging()

from browser_dispatch.browser import (
	Browser,
	BrowserConfig,
	BrowserError,
	CDPTransport,
	Element,
	JavascriptError,
	NoSuchElementError,
	Transport,
	remote,
)
from browser_dispatch.commands import CommandRegistry, CommandScope, RegisteredCommand
from browser_dispatch.multiremote import MultiRemoteBrowser, MultiRemoteElement, MultiRemoteError, multiremote

__all__ = [
	'Browser',
	'BrowserConfig',
	'BrowserError',
	'CDPTransport',
	'CommandRegistry',
	'CommandScope',
	'Element',
	'JavascriptError',
	'MultiRemoteBrowser',
	'MultiRemoteElement',
	'MultiRemoteError',
	'NoSuchElementError',
	'RegisteredCommand',
	'Transport',
	'multiremote',
	'remote',
]
