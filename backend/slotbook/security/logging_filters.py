"""Logging filters that scrub customer contact details."""

from __future__ import annotations

import logging
import re

_EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_PHONE_PATTERN = re.compile(r"(?<![\w:.-])\+?\d(?:[ ()/-]{0,2}\d){8,}(?![\w:.-])")


def redact(text: str) -> str:
    """Replace e-mail addresses and phone numbers with a redaction marker."""
    text = _EMAIL_PATTERN.sub("**REDACTED**", text)
    return _PHONE_PATTERN.sub("**REDACTED**", text)


class SensitiveFilter(logging.Filter):
    """Redact customer contact details from log messages and arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


class RedactionHandler(logging.Handler):
    """Scrub records in place while they propagate through a logger.

    Logger filters only see records logged on that exact logger, so the
    package logger carries this handler instead. It runs before any handler
    further up the hierarchy and writes nothing itself.
    """

    def __init__(self) -> None:
        super().__init__()
        self.addFilter(SensitiveFilter())

    def emit(self, record: logging.LogRecord) -> None:
        return None


def install_redaction(logger: logging.Logger) -> None:
    """Attach a :class:`RedactionHandler` to ``logger`` once."""
    if not any(isinstance(handler, RedactionHandler) for handler in logger.handlers):
        logger.addHandler(RedactionHandler())


__all__ = ["RedactionHandler", "SensitiveFilter", "install_redaction", "redact"]
