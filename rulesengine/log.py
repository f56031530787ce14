"""
Process-wide logging sink.

Nothing is logged until a backend is installed with ``set_backend`` or
``configure_logging``. The engine never depends on logging to work.
"""

import logging
from typing import Optional, Protocol

VERBOSE = 5
ROOT_LOGGER_NAME = "rulesengine"


class LoggingBackend(Protocol):
    def verbose(self, tag: str, message: str) -> None: ...
    def debug(self, tag: str, message: str) -> None: ...
    def warning(self, tag: str, message: str) -> None: ...
    def error(self, tag: str, message: str) -> None: ...


class NoOpBackend:
    def verbose(self, tag: str, message: str) -> None:
        pass

    def debug(self, tag: str, message: str) -> None:
        pass

    def warning(self, tag: str, message: str) -> None:
        pass

    def error(self, tag: str, message: str) -> None:
        pass


class StandardLoggingBackend:
    """Forwards to the ``logging`` module, one child logger per tag."""

    def __init__(self, root: Optional[logging.Logger] = None):
        self.root = root or logging.getLogger(ROOT_LOGGER_NAME)

    def _logger(self, tag: str) -> logging.Logger:
        return self.root.getChild(tag) if tag else self.root

    def verbose(self, tag: str, message: str) -> None:
        self._logger(tag).log(VERBOSE, message)

    def debug(self, tag: str, message: str) -> None:
        self._logger(tag).debug(message)

    def warning(self, tag: str, message: str) -> None:
        self._logger(tag).warning(message)

    def error(self, tag: str, message: str) -> None:
        self._logger(tag).error(message)


_backend: LoggingBackend = NoOpBackend()


def set_backend(backend: Optional[LoggingBackend]) -> None:
    global _backend
    _backend = backend if backend is not None else NoOpBackend()


def get_backend() -> LoggingBackend:
    return _backend


def configure_logging(level: int | str = logging.INFO) -> LoggingBackend:
    logging.addLevelName(VERBOSE, "VERBOSE")
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    backend = StandardLoggingBackend(root)
    set_backend(backend)
    return backend


def verbose(tag: str, message: str) -> None:
    _backend.verbose(tag, message)


def debug(tag: str, message: str) -> None:
    _backend.debug(tag, message)


def warning(tag: str, message: str) -> None:
    _backend.warning(tag, message)


def error(tag: str, message: str) -> None:
    _backend.error(tag, message)
