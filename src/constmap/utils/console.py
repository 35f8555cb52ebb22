"""
Central Logging and Console Utilities.

This module unifies the application's diagnostic output using the Python
standard `logging` library, backed by `rich` for formatting.

Diagnostics are written to standard error. Standard output is reserved for
the generated artifact when the CLI runs with ``--stdout``.

It serves two purposes:
1.  **Standard Logging Integration**: Provides a configured root handler and
    adapter functions (`log_success`, `log_warning`) that route to standard
    logging channels.
2.  **Environment Injection**: Implements a Proxy around the Rich Console so
    that the destination can be swapped at runtime via `set_console` (tests
    capture diagnostics into an in-memory buffer this way).

Attributes:
    console (_ConsoleProxy): A global, stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom level for Success (higher than INFO, lower than WARNING)
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


def _default_console() -> Console:
  return Console(theme=_THEME, stderr=True)


class _ConsoleProxy:
  """
  A Proxy wrapper around `rich.console.Console`.

  All printing operations are forwarded to the backend Console. When the
  backend changes, the proxy also reconfigures the `logging` handlers so that
  `logging.info(...)` writes to the new destination.

  Attributes:
      _backend (Console): The active Rich Console instance.
      _level (int): Root logger threshold applied on (re)configuration.
  """

  def __init__(self) -> None:
    """Initializes the proxy with a default Standard Error console."""
    self._backend: Console = _default_console()
    self._level = logging.INFO
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates logging handlers.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Resets the proxy to a fresh standard error console at INFO level."""
    self._backend = _default_console()
    self._level = logging.INFO
    self._configure_logging()

  def set_level(self, level: int) -> None:
    """
    Changes the root logging threshold (e.g. ``logging.DEBUG`` for ``-v``).

    Args:
        level (int): A `logging` level number.
    """
    self._level = level
    logging.getLogger().setLevel(level)

  @property
  def backend(self) -> Console:
    """The currently active Console implementation."""
    return self._backend

  def _configure_logging(self) -> None:
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )

    root_logger.setLevel(self._level)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Forwards `print` calls to the active backend."""
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    """
    Forwards `export_text` (useful for log capturing).

    Args:
        **kwargs: Options passed to console.export_text.

    Returns:
        str: The captured text output.
    """
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


# Modules import this 'console' object; the implementation behind it can be
# changed via 'set_console'.
console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Global helper to inject a specific console instance.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Global helper to reset logging and console to standard error."""
  console.reset()


def get_console() -> Console:
  """
  Retrieves the currently active console backend.

  Returns:
      Console: The active Rich Console.
  """
  return console.backend


def log_debug(msg: str) -> None:
  """
  Logs a debug message (visible with ``--verbose``).

  Args:
      msg (str): The message content.
  """
  logging.debug(msg, extra={"markup": False})


def log_info(msg: str) -> None:
  """
  Logs an informational message via standard logging.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """
  Logs a success message via standard logging.

  Args:
      msg (str): The message content.
  """
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """
  Logs a warning message via standard logging.

  Args:
      msg (str): The message content.
  """
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error message via standard logging.

  Args:
      msg (str): The message content.
  """
  logging.error(f"❌ {msg}", extra={"markup": True})
