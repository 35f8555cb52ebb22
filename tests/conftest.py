"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Committed expected output (`*.golden` under testdata).
- Console capture so tests can assert on diagnostics.
"""

import io
import logging
import shutil
import sys
import pytest
from pathlib import Path

from rich.console import Console

# Add src to path so we can import 'constmap' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from constmap.utils.console import console as _console, reset_console, set_console  # noqa: E402

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def testdata() -> Path:
  """Directory holding the sample Go package and Python module."""
  return TESTDATA


@pytest.fixture
def golden():
  """
  Reads committed expected output.

  Returns:
      Callable[[str], str]: Maps a file name under testdata to the text of
      ``<name>.golden``.
  """

  def read(name: str) -> str:
    return (TESTDATA / f"{name}.golden").read_text(encoding="utf-8")

  return read


@pytest.fixture
def go_package(tmp_path) -> Path:
  """A writable copy of the sample Go package."""
  target = tmp_path / "channels"
  target.mkdir()
  shutil.copy(TESTDATA / "privateevent.go", target / "privateevent.go")
  return target


@pytest.fixture
def captured_console():
  """
  Routes diagnostics into an in-memory console.

  Yields:
      Console: The recording console; read it with ``export_text()``.
  """
  capture = Console(record=True, file=io.StringIO(), width=200)
  set_console(capture)
  yield capture
  reset_console()


@pytest.fixture(autouse=True)
def reset_log_level():
  """Keeps ``-v`` runs from leaking DEBUG level into other tests."""
  yield
  _console.set_level(logging.INFO)

