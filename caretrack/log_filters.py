"""Logging filters for the ``caretrack`` loggers."""
import logging
import re

_BEARER = re.compile(r'(Bearer\s+)[A-Za-z0-9\-._~+/]+=*', re.IGNORECASE)
_TOKEN_FIELD = re.compile(r'((?:access|refresh|auth0)_?[Tt]oken["\']?\s*[:=]\s*["\']?)[^"\'\s,}]+')


def redact(text: str) -> str:
    text = _BEARER.sub(r'\1[redacted]', text)
    return _TOKEN_FIELD.sub(r'\1[redacted]', text)


class RedactTokensFilter(logging.Filter):
    """Strip bearer and refresh tokens from rendered log messages."""

    def filter(self, record):
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = ()
        return True
