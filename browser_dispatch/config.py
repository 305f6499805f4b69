"""Environment-driven configuration for browser-dispatch."""

import os

from dotenv import load_dotenv

load_dotenv()


class Config:
	"""Reads settings from the environment on every access so tests can monkeypatch them."""

	@property
	def BROWSER_DISPATCH_LOGGING_LEVEL(self) -> str:
		return os.getenv('BROWSER_DISPATCH_LOGGING_LEVEL', 'info').lower()

	@property
	def BROWSER_DISPATCH_SETUP_LOGGING(self) -> bool:
		return os.getenv('BROWSER_DISPATCH_SETUP_LOGGING', 'true').lower()[:1] in {'t', 'y', '1'}

	@property
	def BROWSER_DISPATCH_CDP_URL(self) -> str:
		return os.getenv('BROWSER_DISPATCH_CDP_URL', 'http://localhost:9222')


CONFIG = Config()
