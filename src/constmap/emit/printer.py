"""
Source Printer Protocol.

Defines the abstract interface for printers that consume the artifact plan
and emit unformatted source text for one output language.
"""

from abc import ABC, abstractmethod
from typing import Type

from constmap.emit.ir import Artifact, ArtifactKind, GeneratedFile
from constmap.emit.naming import Naming
from constmap.errors import TemplateRenderError

GENERATED_MARKER = "Code generated by constmap; DO NOT EDIT."


class SourcePrinter(ABC):
  """
  Abstract base class for output printers.
  """

  naming_class: Type[Naming] = Naming
  extension: str = ""

  def naming(self, type_name: str) -> Naming:
    """Naming scheme for artifacts of `type_name`."""
    return self.naming_class(type_name)

  def render(self, plan: GeneratedFile) -> str:
    """
    Renders the plan artifact by artifact.

    Args:
        plan (GeneratedFile): The artifact plan.

    Returns:
        str: Source text, not yet passed through a formatter.
    """
    chunks = [self.render_header(plan)]
    for artifact in plan.artifacts:
      chunks.append(self.render_artifact(plan, artifact))
    return "\n".join(chunks)

  def render_artifact(self, plan: GeneratedFile, artifact: Artifact) -> str:
    handler = getattr(self, f"render_{artifact.kind.value}", None)
    if handler is None:
      raise TemplateRenderError(f"{type(self).__name__} cannot render {artifact.kind.value}")
    if artifact.kind in (ArtifactKind.KEYS_ACCESSOR, ArtifactKind.VALIDATOR, ArtifactKind.MEMBERSHIP):
      if not artifact.lookup:
        raise TemplateRenderError(f"{artifact.name} has no lookup to read from")
    return handler(plan, artifact)

  @abstractmethod
  def render_header(self, plan: GeneratedFile) -> str:
    """Generated-file marker plus package declaration / imports."""
    pass
