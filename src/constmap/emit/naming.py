"""
Artifact Naming.

Derives the public identifiers of generated artifacts from the target type
and group names, per output language, and validates that every name is safe
to interpolate into source text.

Go names follow the historical layout (``AllMarginPrivateChannels``,
``ValidateMarginPrivateChannels``, ``IsMarginPrivateChannel``); Python names are
the snake / upper-snake equivalents.
"""

import keyword
import re
from typing import Optional

from constmap.errors import TemplateRenderError
from constmap.golang.tokens import KEYWORDS as GO_KEYWORDS

_GO_IDENTIFIER = re.compile(r"^[^\W\d]\w*$")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_snake_case(name: str) -> str:
  """
  Converts CamelCase to snake_case (``MWallet`` -> ``m_wallet``).

  Args:
      name: Identifier in CamelCase.

  Returns:
      str: Lower-case snake form.
  """
  return _CAMEL_BOUNDARY.sub("_", name).lower()


class Naming:
  """
  Base naming scheme for one output language.

  Attributes:
      type_name: The target type identifier.
  """

  language = ""

  def __init__(self, type_name: str):
    self.type_name = type_name

  def is_identifier(self, name: str) -> bool:
    raise NotImplementedError

  def check(self, name: str, what: str) -> str:
    """
    Rejects values that are not plain identifiers of the output language.

    Args:
        name: Candidate identifier.
        what: Description used in the error message.

    Returns:
        str: `name` unchanged.

    Raises:
        TemplateRenderError: If `name` cannot be emitted verbatim.
    """
    if not self.is_identifier(name):
      raise TemplateRenderError(f"{what} {name!r} is not a valid {self.language} identifier")
    return name

  def lookup(self, group: Optional[str] = None) -> str:
    raise NotImplementedError

  def keys_accessor(self, group: str) -> str:
    raise NotImplementedError

  def validator(self, group: Optional[str] = None) -> str:
    raise NotImplementedError

  def membership(self, group: str) -> str:
    raise NotImplementedError

  def ordered(self) -> str:
    raise NotImplementedError

  def converter(self) -> str:
    raise NotImplementedError

  def keys_helper(self) -> str:
    raise NotImplementedError


class GoNaming(Naming):
  language = "Go"

  def is_identifier(self, name: str) -> bool:
    return bool(_GO_IDENTIFIER.fullmatch(name)) and name not in GO_KEYWORDS and name != "_"

  def lookup(self, group: Optional[str] = None) -> str:
    return f"All{group or ''}{self.type_name}s"

  def keys_accessor(self, group: str) -> str:
    return f"All{group}{self.type_name}sKeys"

  def validator(self, group: Optional[str] = None) -> str:
    if group:
      return f"Validate{group}{self.type_name}s"
    return f"Validate{self.type_name}"

  def membership(self, group: str) -> str:
    return f"Is{group}{self.type_name}"

  def ordered(self) -> str:
    return f"All{self.type_name}sSlice"

  def converter(self) -> str:
    return f"{self.type_name}Strings"

  def keys_helper(self) -> str:
    return f"{self.type_name}Keys"


class PythonNaming(Naming):
  language = "Python"

  def __init__(self, type_name: str):
    super().__init__(type_name)
    self._snake = to_snake_case(type_name)

  def is_identifier(self, name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)

  def _prefix(self, group: Optional[str]) -> str:
    return f"{to_snake_case(group)}_{self._snake}" if group else self._snake

  def lookup(self, group: Optional[str] = None) -> str:
    return f"ALL_{self._prefix(group).upper()}S"

  def keys_accessor(self, group: str) -> str:
    return f"all_{self._prefix(group)}s_keys"

  def validator(self, group: Optional[str] = None) -> str:
    if group:
      return f"validate_{self._prefix(group)}s"
    return f"validate_{self._snake}"

  def membership(self, group: str) -> str:
    return f"is_{self._prefix(group)}"

  def ordered(self) -> str:
    return f"ALL_{self._snake.upper()}S_SLICE"

  def converter(self) -> str:
    return f"{self._snake}_strings"

  def keys_helper(self) -> str:
    return f"{self._snake}_keys"
