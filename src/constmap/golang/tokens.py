"""
Go Token Definitions.

Defines the enumerations for Token Kinds and the keyword / operator sets used
by the Go Lexer and Parser.
"""

from enum import Enum


class TokenKind(str, Enum):
  """Enumeration of Lexer Token Types."""

  LINE_COMMENT = "LINE_COMMENT"
  BLOCK_COMMENT = "BLOCK_COMMENT"
  RAW_STRING = "RAW_STRING"
  STRING = "STRING"
  RUNE = "RUNE"
  NUMBER = "NUMBER"
  IDENTIFIER = "IDENTIFIER"
  OPERATOR = "OPERATOR"
  NEWLINE = "NEWLINE"
  WHITESPACE = "WHITESPACE"
  MISMATCH = "MISMATCH"
  SEMICOLON = "SEMICOLON"
  EOF = "EOF"


class Symbol(str, Enum):
  """Punctuation the parser matches on."""

  LPAREN = "("
  RPAREN = ")"
  LBRACKET = "["
  RBRACKET = "]"
  LBRACE = "{"
  RBRACE = "}"
  COMMA = ","
  SEMI = ";"
  ASSIGN = "="
  DOT = "."


KEYWORDS = frozenset(
  {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
  }
)

# A newline after one of these ends the statement (automatic semicolon).
SEMI_KEYWORDS = frozenset({"break", "continue", "fallthrough", "return"})
SEMI_OPERATORS = frozenset({"++", "--", ")", "]", "}"})

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = frozenset(OPENERS.values())

INTEGER_KINDS = frozenset(
  {
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
    "byte",
    "rune",
  }
)
