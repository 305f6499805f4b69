import logging
import sys

from browser_dispatch.config import CONFIG

THIRD_PARTY_LOGGERS = [
	'httpx',
	'httpcore',
	'websockets',
	'websockets.client',
	'cdp_use',
	'cdp_use.client',
	'asyncio',
]


class BrowserDispatchFormatter(logging.Formatter):
	def format(self, record):
		# browser_dispatch.multiremote.service -> multiremote.service
		if isinstance(record.name, str) and record.name.startswith('browser_dispatch.'):
			record.name = record.name.removeprefix('browser_dispatch.')
		return super().format(record)


def setup_logging(stream=None, log_level=None, force_setup=False) -> logging.Logger:
	"""Attach a console handler to the browser_dispatch logger.

	Args:
		stream: Output stream for logs (default: sys.stdout)
		log_level: Overrides BROWSER_DISPATCH_LOGGING_LEVEL if provided
		force_setup: Replace handlers even if logging was already configured
	"""
	logger = logging.getLogger('browser_dispatch')
	if logger.handlers and not force_setup:
		return logger

	log_type = log_level or CONFIG.BROWSER_DISPATCH_LOGGING_LEVEL
	level = logging.getLevelNamesMapping().get(log_type.upper(), logging.INFO)

	console = logging.StreamHandler(stream or sys.stdout)
	console.setFormatter(BrowserDispatchFormatter('%(levelname)-8s [%(name)s] %(message)s'))

	logger.handlers = []
	logger.addHandler(console)
	logger.setLevel(level)
	logger.propagate = False

	# Silence third-party loggers
	for name in THIRD_PARTY_LOGGERS:
		third_party = logging.getLogger(name)
		third_party.setLevel(logging.ERROR)
		third_party.propagate = False

	logger.debug(f'browser_dispatch logging set up at level {logging.getLevelName(level)}')
	return logger
