# ╔══════════════════════════════════════════════════════════════════════╗
# ║  PatchConv — Dense Convolution Primitives                            ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Logging helpers.

PatchConv is a library: by default it only attaches a ``NullHandler`` to
the ``patchconv`` logger and leaves its level to the host application.
A stream handler is installed only when a log level is requested through
``PATCHCONV_LOG_LEVEL`` or :func:`patchconv.set_config`.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

LOGGER_NAME = 'patchconv'

_PLAIN_FORMAT = '%(asctime)s %(levelname)s %(name)s.%(funcName)s: %(message)s'


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record, keys sorted.

    ``function`` names the operation that logged (``conv2d``,
    ``resolve_geometry``, ...) so geometry traces can be filtered per op.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'function': record.funcName,
            'message': record.getMessage(),
        }
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True)


def _own_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, '_patchconv_handler', False)]


def configure_logging(level: str | None = None, fmt: str = 'plain') -> logging.Logger:
    """(Re)configure the package logger.

    With ``level=None`` any handler previously installed here is replaced
    by a ``NullHandler`` and the logger level is left untouched. With a
    level, a single stream handler in *fmt* (``plain`` or ``json``) is
    installed and the level is set. Repeated calls never stack handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in _own_handlers(logger):
        logger.removeHandler(handler)

    if level is None:
        handler: logging.Handler = logging.NullHandler()
    else:
        logger.setLevel(level.upper())
        handler = logging.StreamHandler()
        if fmt == 'json':
            handler.setFormatter(JsonLogFormatter())
        else:
            handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    handler._patchconv_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
