import logging
import os
from typing import Iterable, Optional, Sequence, Set

_REDACTED_PLACEHOLDER = "[REDACTED]"
_SENSITIVE_KEY_PARTS = ("TOKEN", "SECRET", "KEY", "PASS", "PWD")
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Libraries that log every HTTP request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore")


def _is_sensitive_env_var(name: str) -> bool:
    upper_name = name.upper()
    return any(part in upper_name for part in _SENSITIVE_KEY_PARTS)


def collect_sensitive_values(extra_values: Optional[Iterable[Optional[str]]] = None) -> Sequence[str]:
    """Return secret-looking environment values plus ``extra_values``.

    Longer values come first so that a secret containing another secret is
    replaced as a whole.
    """

    secrets: Set[str] = set()
    for key, value in os.environ.items():
        if _is_sensitive_env_var(key) and value:
            secrets.add(value)
    for value in extra_values or ():
        if isinstance(value, str) and value:
            secrets.add(value)
    return tuple(sorted(secrets, key=len, reverse=True))


class RedactingFormatter(logging.Formatter):
    """Wrap another formatter and redact sensitive values from its output."""

    def __init__(
        self,
        base_formatter: Optional[logging.Formatter] = None,
        secrets: Optional[Sequence[str]] = None,
        placeholder: str = _REDACTED_PLACEHOLDER,
    ) -> None:
        super().__init__()
        self._base_formatter = base_formatter or logging.Formatter(DEFAULT_FORMAT)
        self._secrets: Sequence[str] = tuple(secrets or ())
        self._placeholder = placeholder
        self.converter = self._base_formatter.converter

    @property
    def secrets(self) -> Sequence[str]:
        return self._secrets

    def update_secrets(self, secrets: Sequence[str]) -> None:
        self._secrets = tuple(secrets)

    def redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, self._placeholder)
        return text

    def format(self, record: logging.LogRecord) -> str:
        return self.redact(self._base_formatter.format(record))

    def formatException(self, ei):
        return self.redact(self._base_formatter.formatException(ei))

    def formatTime(self, record, datefmt=None):
        return self._base_formatter.formatTime(record, datefmt)


def _wrap_handlers(handlers: Iterable[logging.Handler], secrets: Sequence[str]) -> None:
    for handler in handlers:
        formatter = handler.formatter
        if isinstance(formatter, RedactingFormatter):
            formatter.update_secrets(secrets)
        else:
            handler.setFormatter(RedactingFormatter(formatter, secrets))


def configure_logging(
    *,
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    extra_values: Optional[Iterable[Optional[str]]] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure root logging and redact sensitive values from all handlers.

    ``level`` and ``fmt`` default to the ``LOG_LEVEL`` and ``LOG_FORMAT``
    environment variables. Loggers named in ``quiet`` are raised to WARNING
    unless the root level is DEBUG.
    """

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()
    if fmt is None:
        fmt = os.getenv("LOG_FORMAT", DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=fmt)
    root_logger.setLevel(level)

    if root_logger.getEffectiveLevel() > logging.DEBUG:
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)

    secrets = collect_sensitive_values(extra_values)
    _wrap_handlers(root_logger.handlers, secrets)
    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            _wrap_handlers(logger_obj.handlers, secrets)


__all__ = ["RedactingFormatter", "collect_sensitive_values", "configure_logging"]
