"""
Go Printer.

Renders the artifact plan as Go source laid out the way ``gofmt`` prints it
(tab indentation, aligned ``key: value`` columns in map literals), so the
output is already canonical when ``gofmt`` is not installed.
"""

import math
from typing import List

from constmap.emit.ir import Artifact, GeneratedFile
from constmap.emit.naming import GoNaming
from constmap.emit.printer import GENERATED_MARKER, SourcePrinter

# gofmt alignment thresholds (go/printer exprList)
_SMALL_KEY = 40
_KEY_RATIO = 2.5


def align_key_values(keys: List[str], value: str) -> List[str]:
  """
  Lays out ``key: value,`` lines with gofmt's column alignment.

  Consecutive keys share one column unless a key is much longer or shorter
  than the geometric mean of the keys before it in the same section (only
  considered once a key exceeds 40 characters), which starts a new alignment
  section.

  Args:
      keys: Map keys in order.
      value: Value expression printed for every key.

  Returns:
      List[str]: One tab-indented line per key.
  """
  sections: List[List[str]] = []
  lnsum = 0.0
  count = 0
  prev_size = 0
  for i, key in enumerate(keys):
    size = len(key)
    new_section = True
    if prev_size > 0 and size > 0:
      if count == 0 or (prev_size <= _SMALL_KEY and size <= _SMALL_KEY):
        new_section = False
      else:
        ratio = size / math.exp(lnsum / count)
        new_section = _KEY_RATIO * ratio <= 1 or _KEY_RATIO <= ratio
    if i == 0 or new_section:
      sections.append([])
      lnsum = 0.0
      count = 0
    sections[-1].append(key)
    lnsum += math.log(size)
    count += 1
    prev_size = size

  lines: List[str] = []
  for section in sections:
    width = max(len(k) for k in section) + 1
    for key in section:
      lines.append(f"\t{(key + ':').ljust(width)} {value},")
  return lines


class GoPrinter(SourcePrinter):
  """
  Renders a GeneratedFile as Go source.
  """

  naming_class = GoNaming
  extension = ".go"

  def render_header(self, plan: GeneratedFile) -> str:
    return f"// {GENERATED_MARKER}\n\npackage {plan.package_name}\n"

  def render_lookup(self, plan: GeneratedFile, artifact: Artifact) -> str:
    head = f"var {artifact.name} = map[{plan.type_name}]struct{{}}"
    if not artifact.elements:
      return f"{head}{{}}\n"
    body = "\n".join(align_key_values(list(artifact.elements), "{}"))
    return f"{head}{{\n{body}\n}}\n"

  def render_keys_accessor(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    return (
      f"// {artifact.name} converts the {artifact.group} group map of {t} to a slice of {t}\n"
      f"func {artifact.name}() []{t} {{\n"
      f"\tkeys := make([]{t}, 0, len({artifact.lookup}))\n"
      f"\tfor k := range {artifact.lookup} {{\n"
      f"\t\tkeys = append(keys, k)\n"
      f"\t}}\n"
      f"\treturn keys\n"
      f"}}\n"
    )

  def render_validator(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    if artifact.group:
      doc = f"// {artifact.name} validates if a value belongs to the {artifact.group} group of {t}"
    else:
      doc = f"// {artifact.name} validates a value of type {t}"
    return (
      f"{doc}\n"
      f"func {artifact.name}(ch {t}) bool {{\n"
      f"\t_, ok := {artifact.lookup}[ch]\n"
      f"\treturn ok\n"
      f"}}\n"
    )

  def render_membership(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    return (
      f"// {artifact.name} checks if the value is in the {artifact.group} group of {t}\n"
      f"func {artifact.name}(ch {t}) bool {{\n"
      f"\t_, exist := {artifact.lookup}[ch]\n"
      f"\treturn exist\n"
      f"}}\n"
    )

  def render_ordered(self, plan: GeneratedFile, artifact: Artifact) -> str:
    head = f"var {artifact.name} = []{plan.type_name}"
    if not artifact.elements:
      return f"{head}{{}}\n"
    body = "\n".join(f"\t{name}," for name in artifact.elements)
    return f"{head}{{\n{body}\n}}\n"

  def render_converter(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    prim = "int" if plan.has_int_values else "string"
    return (
      f"// {artifact.name} converts a slice of {t} to a slice of {prim}\n"
      f"func {artifact.name}(slice []{t}) (out []{prim}) {{\n"
      f"\tfor _, el := range slice {{\n"
      f"\t\tout = append(out, {prim}(el))\n"
      f"\t}}\n"
      f"\treturn out\n"
      f"}}\n"
    )

  def render_keys_helper(self, plan: GeneratedFile, artifact: Artifact) -> str:
    t = plan.type_name
    return (
      f"// {artifact.name} converts a map of {t} to a slice of {t}\n"
      f"func {artifact.name}(values map[{t}]struct{{}}) (slice []{t}) {{\n"
      f"\tfor k := range values {{\n"
      f"\t\tslice = append(slice, k)\n"
      f"\t}}\n"
      f"\treturn slice\n"
      f"}}\n"
    )
