"""
# Logging Manager

Central place where loggers are created. Every module obtains its logger through
`get_logger()`, optionally with a bracketed prefix that tags the subsystem:

```python
from event_blog.managers.logging_manager import get_logger

logger = get_logger()
db_logger = get_logger(prefix="[DATABASE]")

db_logger.info("Connected to %s", "event_blog")
# 2026-01-01 12:00:00,000 INFO EventBlog [DATABASE] Connected to event_blog
```

The stream handler is attached once to the `EventBlog` root logger; prefixed loggers
are children of it and propagate there.
"""

import logging
import sys
from typing import Dict

from event_blog.config import settings

DEFAULT_LOGGER_NAME = "EventBlog"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False
_adapters: Dict[str, "PrefixedLoggerAdapter"] = {}


class PrefixedLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that prepends a fixed prefix to every message."""

    def __init__(self, logger: logging.Logger, prefix: str = ""):
        super().__init__(logger, {})
        self.prefix = prefix

    def process(self, msg, kwargs):
        if self.prefix:
            return f"{self.prefix} {msg}", kwargs
        return msg, kwargs


def setup_logging(level: str = None) -> logging.Logger:
    """Attach the stream handler to the application root logger (idempotent)."""
    global _configured

    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    root.setLevel((level or settings.LOG_LEVEL).upper())
    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _configured = True
    return root


def get_logger(name: str = DEFAULT_LOGGER_NAME, prefix: str = "") -> PrefixedLoggerAdapter:
    """
    Return a (cached) logger adapter for `name` with an optional message prefix.

    Args:
        name: Logger name. Names outside the `EventBlog` hierarchy are nested under it.
        prefix: Text such as `"[DATABASE]"` prepended to each message.
    """
    key = f"{name}|{prefix}"
    if key in _adapters:
        return _adapters[key]

    setup_logging()
    if name != DEFAULT_LOGGER_NAME and not name.startswith(DEFAULT_LOGGER_NAME + "."):
        name = f"{DEFAULT_LOGGER_NAME}.{name}"
    adapter = PrefixedLoggerAdapter(logging.getLogger(name), prefix)
    _adapters[key] = adapter
    return adapter
