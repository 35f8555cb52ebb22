"""
Data structures representing the output of the generation pipeline.

This module defines the `GenerationResult` Pydantic model, which encapsulates
the generated code together with what was discovered while producing it.
"""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class GenerationResult(BaseModel):
  """
  Container for the results of one generator run.
  """

  code: str = Field(default="", description="The generated source code.")
  type_name: str = Field(default="", description="The type the lookup tables were generated for.")
  package_name: str = Field(default="", description="Package clause (Go) or source module (Python).")
  language: str = Field(default="go", description="Host language of the input and output.")
  output_path: Optional[Path] = Field(default=None, description="Destination, when written to a file.")
  symbols: List[str] = Field(default_factory=list, description="Discovered constants in source order.")
  groups: Dict[str, List[str]] = Field(default_factory=dict, description="Group name -> members.")
  has_int_values: bool = Field(default=False, description="Whether the converter yields integers.")
  warnings: List[str] = Field(default_factory=list, description="Non-fatal diagnostics.")

  @property
  def symbol_count(self) -> int:
    return len(self.symbols)

  @property
  def has_warnings(self) -> bool:
    """
    Check if the run produced any warnings.

    Returns:
        True if one or more warnings are present.
    """
    return len(self.warnings) > 0
