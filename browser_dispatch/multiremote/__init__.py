from browser_dispatch.multiremote.service import (
	FanOutCommand,
	MultiRemoteBrowser,
	MultiRemoteElement,
	SessionFactory,
	multiremote,
	validate_instance_label,
)
from browser_dispatch.multiremote.views import MultiRemoteError

__all__ = [
	'FanOutCommand',
	'MultiRemoteBrowser',
	'MultiRemoteElement',
	'MultiRemoteError',
	'SessionFactory',
	'multiremote',
	'validate_instance_label',
]
