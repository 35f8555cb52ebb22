"""
Python Printer.

Renders the artifact plan as a Python module. The module imports the target
type and its constants from the analyzed source module; lookups are dicts
mapping each constant to ``None``.
"""

from constmap.emit.ir import Artifact, GeneratedFile
from constmap.emit.naming import PythonNaming
from constmap.emit.printer import GENERATED_MARKER, SourcePrinter

INDENT = "    "


class PythonPrinter(SourcePrinter):
  """
  Renders a GeneratedFile as a Python module.
  """

  naming_class = PythonNaming
  extension = ".py"

  def render_header(self, plan: GeneratedFile) -> str:
    imported = [plan.type_name, *plan.symbols]
    names = "".join(f"{INDENT}{name},\n" for name in imported)
    return (
      f"# {GENERATED_MARKER}\n"
      f'"""Lookup tables for {plan.type_name} constants of ``{plan.package_name}``."""\n'
      f"\n"
      f"from typing import Dict, List, Mapping, Sequence\n"
      f"\n"
      f"from {plan.package_name} import (\n"
      f"{names}"
      f")\n"
    )

  def render(self, plan: GeneratedFile) -> str:
    # Two blank lines between top-level statements (PEP 8)
    chunks = [self.render_header(plan)]
    chunks.extend(self.render_artifact(plan, artifact) for artifact in plan.artifacts)
    return "\n\n".join(chunks)

  def _block(self, head: str, open_: str, close: str, lines) -> str:
    if not lines:
      return f"{head}{open_}{close}\n"
    body = "".join(f"{INDENT}{line}\n" for line in lines)
    return f"{head}{open_}\n{body}{close}\n"

  def render_lookup(self, plan: GeneratedFile, artifact: Artifact) -> str:
    head = f"{artifact.name}: Dict[{plan.type_name}, None] = "
    return self._block(head, "{", "}", [f"{name}: None," for name in artifact.elements])

  def render_keys_accessor(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    return (
      f"def {artifact.name}() -> List[{t}]:\n"
      f'{INDENT}"""Converts the {artifact.group} group map of {t} to a list of {t}."""\n'
      f"{INDENT}return list({artifact.lookup})\n"
    )

  def render_validator(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    if artifact.group:
      doc = f"Validates if a value belongs to the {artifact.group} group of {t}."
    else:
      doc = f"Validates a value of type {t}."
    return (
      f"def {artifact.name}(ch: {t}) -> bool:\n"
      f'{INDENT}"""{doc}"""\n'
      f"{INDENT}return ch in {artifact.lookup}\n"
    )

  def render_membership(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    return (
      f"def {artifact.name}(ch: {t}) -> bool:\n"
      f'{INDENT}"""Checks if the value is in the {artifact.group} group of {t}."""\n'
      f"{INDENT}return ch in {artifact.lookup}\n"
    )

  def render_ordered(self, plan: GeneratedFile, artifact: Artifact) -> str:
    head = f"{artifact.name}: List[{plan.type_name}] = "
    return self._block(head, "[", "]", [f"{name}," for name in artifact.elements])

  def render_converter(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    prim = "int" if plan.has_int_values else "str"
    return (
      f"def {artifact.name}(values: Sequence[{t}]) -> List[{prim}]:\n"
      f'{INDENT}"""Converts a sequence of {t} to a list of {prim}, unwrapping Enum members."""\n'
      f'{INDENT}return [{prim}(getattr(el, "value", el)) for el in values]\n'
    )

  def render_keys_helper(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    return (
      f"def {artifact.name}(values: Mapping[{t}, None]) -> List[{t}]:\n"
      f'{INDENT}"""Converts a map of {t} to a list of {t}."""\n'
      f"{INDENT}return list(values)\n"
    )
