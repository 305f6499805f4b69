import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from browser_dispatch.config import CONFIG


class BrowserError(Exception):
	"""Browser error with an optional details payload from the transport.

	Attributes:
		message: Human readable description
		details: Raw data returned by the transport, if any
	"""

	def __init__(self, message: str, details: dict[str, Any] | None = None):
		self.message = message
		self.details = details
		super().__init__(message)


class NoSuchElementError(BrowserError):
	"""Raised when an element-targeted action runs on an element that did not match"""

	def __init__(self, selector: str, details: dict[str, Any] | None = None):
		self.selector = selector
		super().__init__(f"Element with selector '{selector}' does not exist", details)


class JavascriptError(BrowserError):
	"""Raised when a script throws inside the page"""


class BrowserConfig(BaseModel):
	"""Per-session connection settings.

	`capabilities` is passed through untouched; the transport decides what to
	do with it.
	"""

	model_config = ConfigDict(extra='forbid', validate_assignment=True)

	cdp_url: str = Field(default_factory=lambda: CONFIG.BROWSER_DISPATCH_CDP_URL)
	headers: dict[str, str] | None = None
	capabilities: dict[str, Any] = Field(default_factory=dict)
	log_level: str | None = None

	@field_validator('log_level')
	@classmethod
	def validate_log_level(cls, v: str | None) -> str | None:
		if v is None:
			return v
		if v.upper() not in logging.getLevelNamesMapping():
			raise ValueError(f'Unknown log level {v!r}, expected one of {sorted(logging.getLevelNamesMapping())}')
		return v.upper()
