# utils/logger.py

import inspect
import logging
import sys

_DEFAULT_FORMAT = "%(asctime)s — %(levelname)s  \t[%(name)s%(tag)s]  \t%(message)s"
_DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

class TaggedFormatter(logging.Formatter):
	"""
	Formatter that tolerates records emitted without a tag, e.g. from uvicorn or
	pymongo loggers that do not go through the adapter returned by `logger()`.
	"""
	def __init__(
		self,
		fmt=_DEFAULT_FORMAT,
		datefmt=_DEFAULT_DATE_FORMAT,
		**kwargs
	):
		super().__init__(fmt, datefmt, **kwargs)

	def format(self, record: logging.LogRecord) -> str:
		if not hasattr(record, "tag"):
			record.tag = ""
		return super().format(record)

def setup_logging(
	level: int | str = logging.INFO,
	stream=sys.stdout
) -> None:
	"""
	Configures the root logger for the service.

	Call once at startup, before the first log line. Calling it again is a no-op so
	tests and the uvicorn reloader can import the app repeatedly.

	Args:
		level: Minimum level, either a logging constant or a name such as "DEBUG".
		stream: Where log lines are written.
	"""
	root_logger = logging.getLogger()

	if root_logger.handlers:
		return

	if isinstance(level, str):
		level = logging.getLevelName(level.upper())
		if not isinstance(level, int):
			level = logging.INFO

	handler = logging.StreamHandler(stream=stream)
	handler.setFormatter(TaggedFormatter())
	root_logger.addHandler(handler)
	root_logger.setLevel(level)
	root_logger.info("Logger set up")

def logger(
	tag: str | None = None,
	*,
	name: str | None = None
) -> logging.LoggerAdapter:
	"""
	Returns a logger that injects a tag into each record.

	The name defaults to the calling module, so inside `vaxtrack/core/sweeper.py`
	```
		logger(tag="sweep").info("Marked 3 schedules as missed")
	```
	prints
	```
		2026-01-05 01:00:00 — INFO  	[vaxtrack.core.sweeper:sweep]  	Marked 3 schedules as missed
	```
	"""
	logger_name = name
	if logger_name is None:
		frame = inspect.stack()[1]
		module = inspect.getmodule(frame[0])
		logger_name = module.__name__ if module else "unknown_module"
	base_logger = logging.getLogger(logger_name)

	return logging.LoggerAdapter(
		base_logger,
		{"tag": f":{tag}" if tag is not None else ""}
	)
