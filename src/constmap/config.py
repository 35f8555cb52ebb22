"""
Generator Configuration.

Merges command line flags over the ``[tool.constmap]`` section of the nearest
``pyproject.toml`` over built-in defaults.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from constmap.errors import ConfigurationError
from constmap.registry import available_languages, detect_language

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

LANGUAGE_CHOICES = ("auto", "go", "python")
FORMATTER_CHOICES = ("auto", "gofmt", "builtin")

_EXTENSIONS = {"go": ".go", "python": ".py"}


class GeneratorConfig(BaseModel):
  """
  Resolved settings for one generator run.
  """

  type_name: str = Field(..., description="Name of the constant type to map (e.g. 'PrivateChannel').")
  pattern: str = Field(".", description="Load pattern: directory, source file or 'dir/...'.")
  output: Optional[Path] = Field(None, description="Destination file. Defaults to '<type>map.<ext>'.")
  stdout: bool = Field(False, description="Write the generated code to stdout instead of a file.")
  language: str = Field("auto", description="Host language of the input ('auto' detects from the pattern).")
  formatter: str = Field("auto", description="Canonical formatter: 'auto', 'gofmt' or 'builtin'.")
  gofmt_path: Optional[str] = Field(None, description="Explicit gofmt executable.")
  int_values: Optional[bool] = Field(None, description="Force integer (True) or string (False) conversion.")
  output_suffix: str = Field("map", description="Suffix appended to the lower-cased type in the default file name.")
  verbose: bool = Field(False, description="Enable debug logging.")

  @field_validator("type_name")
  @classmethod
  def validate_type_name(cls, v: str) -> str:
    v_clean = v.strip()
    if not v_clean:
      raise ValueError("type name must not be empty")
    return v_clean

  @field_validator("language")
  @classmethod
  def validate_language(cls, v: str) -> str:
    """
    Ensures the language is 'auto' or a registered language.

    Args:
        v (str): Raw language key.

    Returns:
        str: Normalized (lowercase) key.

    Raises:
        ValueError: If the language is unknown.
    """
    v_clean = v.lower().strip()
    if v_clean != "auto" and v_clean not in available_languages():
      raise ValueError(f"Unknown language: '{v_clean}'. Supported: {list(LANGUAGE_CHOICES)}")
    return v_clean

  @field_validator("formatter")
  @classmethod
  def validate_formatter(cls, v: str) -> str:
    v_clean = v.lower().strip()
    if v_clean not in FORMATTER_CHOICES:
      raise ValueError(f"Unknown formatter: '{v_clean}'. Supported: {list(FORMATTER_CHOICES)}")
    return v_clean

  @property
  def resolved_language(self) -> str:
    """
    The concrete host language, detecting it from the pattern when 'auto'.

    Returns:
        str: 'go' or 'python'.
    """
    if self.language != "auto":
      return self.language
    return detect_language(self.pattern.rstrip("/").removesuffix("/..."))

  @property
  def output_path(self) -> Path:
    """
    Destination of the generated file.

    Returns:
        Path: The explicit output, or '<lower(type)><suffix><ext>' in the working directory.
    """
    if self.output is not None:
      return self.output
    extension = _EXTENSIONS[self.resolved_language]
    return Path(f"{self.type_name.lower()}{self.output_suffix}{extension}")

  @classmethod
  def load(
    cls,
    type_name: Optional[str],
    pattern: str = ".",
    output: Optional[Path] = None,
    stdout: bool = False,
    language: Optional[str] = None,
    formatter: Optional[str] = None,
    gofmt_path: Optional[str] = None,
    int_values: Optional[bool] = None,
    verbose: bool = False,
    search_path: Optional[Path] = None,
  ) -> "GeneratorConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        type_name (Optional[str]): The target type. Required.
        pattern (str): Load pattern.
        output (Optional[Path]): Explicit destination file.
        stdout (bool): Print instead of writing a file.
        language (Optional[str]): Override for the host language.
        formatter (Optional[str]): Override for the formatter choice.
        gofmt_path (Optional[str]): Override for the gofmt executable.
        int_values (Optional[bool]): Override for integer capability.
        verbose (bool): Debug logging.
        search_path (Optional[Path]): Directory to start searching for TOML config.
            Defaults to the pattern's directory.

    Returns:
        GeneratorConfig: The fully resolved configuration.

    Raises:
        ConfigurationError: If the type is missing or a value is invalid.
    """
    if not type_name:
      raise ConfigurationError("A type name must be specified with -type")

    start_dir = search_path or _pattern_dir(pattern)
    toml_config, _ = _load_toml_settings(start_dir)

    try:
      return cls(
        type_name=type_name,
        pattern=pattern,
        output=output,
        stdout=stdout,
        language=language or toml_config.get("language", "auto"),
        formatter=formatter or toml_config.get("formatter", "auto"),
        gofmt_path=gofmt_path or toml_config.get("gofmt_path"),
        int_values=int_values,
        output_suffix=toml_config.get("output_suffix", "map"),
        verbose=verbose,
      )
    except ValidationError as e:
      raise ConfigurationError(f"Invalid configuration: {e}") from e


def _pattern_dir(pattern: str) -> Path:
  path = Path(pattern.removesuffix("...") or ".")
  if path.is_file():
    return path.parent
  return path if path.is_dir() else Path.cwd()


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches parents for 'pyproject.toml' and extracts the constmap section.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.

  Raises:
      ConfigurationError: If the nearest pyproject.toml is not valid TOML.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Cannot read {toml_path}: {e}") from e

      return data.get("tool", {}).get("constmap", {}), parent

  return {}, None
