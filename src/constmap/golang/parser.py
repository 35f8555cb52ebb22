"""
Go Top-Level Declaration Parser.

This module parses Go source text into the shallow node model defined in
`nodes.py`. It is a recursive descent parser over a token stream with Go's
automatic semicolon insertion applied, and it attaches lead comments to
declarations and specs with the same rule as ``go/parser``: comments on
adjacent lines form a group, and a group documents the next token when that
token starts on the line right after the group ends.
"""

import re
from dataclasses import dataclass
from typing import Dict, Generator, List, NoReturn, Optional, Tuple

from constmap.analysis.records import CommentGroup
from constmap.golang.nodes import FuncDecl, GenDecl, GoFile, TypeSpec, ValueSpec
from constmap.golang.tokens import (
  CLOSERS,
  KEYWORDS,
  OPENERS,
  SEMI_KEYWORDS,
  SEMI_OPERATORS,
  Symbol,
  TokenKind,
)


@dataclass
class Token:
  kind: str
  text: str
  line: int
  col: int
  start: int = 0
  end: int = 0

  @property
  def end_line(self) -> int:
    return self.line + self.text.count("\n")


class Tokenizer:
  PATTERN_DEFS = [
    (TokenKind.LINE_COMMENT, r"//[^\n]*"),
    (TokenKind.BLOCK_COMMENT, r"/\*(?s:.*?)\*/"),
    (TokenKind.RAW_STRING, r"`[^`]*`"),
    (TokenKind.STRING, r'"(?:[^"\\\n]|\\.)*"'),
    (TokenKind.RUNE, r"'(?:[^'\\\n]|\\[^\n]+?)'"),
    (
      TokenKind.NUMBER,
      r"(?:0[xX][0-9a-fA-F_]*(?:\.[0-9a-fA-F_]*)?(?:[pP][+-]?[0-9_]+)?"
      r"|0[bBoO][0-9_]+"
      r"|(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d[\d_]*)?)i?",
    ),
    (TokenKind.IDENTIFIER, r"[^\W\d]\w*"),
    (
      TokenKind.OPERATOR,
      r"<<=|>>=|&\^=|\.\.\.|&&|\|\||<-|\+\+|--|==|!=|<=|>=|:=|<<|>>|&\^|[-+*/%&|^]="
      r"|[-+*/%&|^<>=!~.,;:()\[\]{}]",
    ),
    (TokenKind.NEWLINE, r"\n"),
    (TokenKind.WHITESPACE, r"[ \t\r\f\ufeff]+"),
    (TokenKind.MISMATCH, r"."),
  ]

  _REGEX = re.compile("|".join(f"(?P<{kind.value}>{pattern})" for kind, pattern in PATTERN_DEFS))

  def __init__(self, text: str, filename: str = "<input>"):
    self.text = text
    self.filename = filename

  def tokenize(self) -> Generator[Token, None, None]:
    line_num = 1
    line_start = 0
    for mo in self._REGEX.finditer(self.text):
      kind = TokenKind(mo.lastgroup)
      value = mo.group()
      col = mo.start() - line_start + 1

      if kind == TokenKind.MISMATCH:
        raise SyntaxError(f"{self.filename}:{line_num}:{col}: unexpected character {value!r}")

      yield Token(kind, value, line_num, col, mo.start(), mo.end())

      newlines = value.count("\n")
      if newlines:
        line_num += newlines
        line_start = mo.start() + value.rfind("\n") + 1
    yield Token(TokenKind.EOF, "", line_num, 1, len(self.text), len(self.text))


def _needs_semicolon(tok: Token) -> bool:
  if tok.kind in (TokenKind.NUMBER, TokenKind.STRING, TokenKind.RAW_STRING, TokenKind.RUNE):
    return True
  if tok.kind == TokenKind.IDENTIFIER:
    return tok.text not in KEYWORDS or tok.text in SEMI_KEYWORDS
  return tok.kind == TokenKind.OPERATOR and tok.text in SEMI_OPERATORS


def scan(text: str, filename: str = "<input>") -> List[Token]:
  """
  Tokenizes Go source and applies automatic semicolon insertion.

  Whitespace is dropped; comments are kept in stream order.

  Args:
      text: Go source.
      filename: Name used in error messages.

  Returns:
      Tokens, ending with EOF.
  """
  out: List[Token] = []
  last: Optional[Token] = None

  def insert_semicolon(at: Token) -> None:
    nonlocal last
    if last is not None and _needs_semicolon(last):
      out.append(Token(TokenKind.SEMICOLON, "\n", at.line, at.col, at.start, at.start))
    last = None

  for tok in Tokenizer(text, filename).tokenize():
    if tok.kind == TokenKind.WHITESPACE:
      continue
    if tok.kind == TokenKind.NEWLINE:
      insert_semicolon(tok)
      continue
    if tok.kind == TokenKind.EOF:
      insert_semicolon(tok)
      out.append(tok)
      break
    if tok.kind in (TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT):
      out.append(tok)
      if tok.kind == TokenKind.BLOCK_COMMENT and "\n" in tok.text:
        insert_semicolon(tok)
      continue
    if tok.kind == TokenKind.OPERATOR and tok.text == Symbol.SEMI:
      tok = Token(TokenKind.SEMICOLON, tok.text, tok.line, tok.col, tok.start, tok.end)
      out.append(tok)
      last = None
      continue
    out.append(tok)
    last = tok
  return out


def _comment_body(tok: Token) -> str:
  if tok.kind == TokenKind.LINE_COMMENT:
    return tok.text[2:]
  return tok.text


def _lead_group(pending: List[Tuple[Token, bool]], line: int) -> Optional[CommentGroup]:
  groups: List[List[Token]] = []
  for tok, trailing in pending:
    if trailing:
      continue
    if groups and tok.line <= groups[-1][-1].end_line + 1:
      groups[-1].append(tok)
    else:
      groups.append([tok])
  if not groups or groups[-1][-1].end_line + 1 != line:
    return None
  return CommentGroup.from_lines([_comment_body(t) for t in groups[-1]])


class GoParser:
  def __init__(self, text: str, filename: str = "<input>"):
    self.text = text
    self.filename = filename
    self.tokens: List[Token] = []
    self.leads: Dict[int, CommentGroup] = {}
    self.pos = 0
    self._split_comments(scan(text, filename))

  def _split_comments(self, stream: List[Token]) -> None:
    pending: List[Tuple[Token, bool]] = []
    prev: Optional[Token] = None
    for tok in stream:
      if tok.kind in (TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT):
        trailing = prev is not None and tok.line == prev.end_line
        pending.append((tok, trailing))
        continue
      if tok.kind != TokenKind.SEMICOLON:
        group = _lead_group(pending, tok.line)
        if group is not None:
          self.leads[len(self.tokens)] = group
        pending = []
        prev = tok
      self.tokens.append(tok)

  # --- Token cursor ---

  def peek(self, offset: int = 0) -> Token:
    idx = self.pos + offset
    if idx >= len(self.tokens):
      return self.tokens[-1]
    return self.tokens[idx]

  def consume(self) -> Token:
    token = self.peek()
    if token.kind != TokenKind.EOF:
      self.pos += 1
    return token

  def match(self, kind: str) -> bool:
    tk = self.peek()
    if tk.kind == kind:
      return True
    if tk.kind == TokenKind.OPERATOR and tk.text == kind:
      return True
    return False

  def match_keyword(self, word: str) -> bool:
    tk = self.peek()
    return tk.kind == TokenKind.IDENTIFIER and tk.text == word

  def expect(self, kind: str) -> Token:
    if not self.match(kind):
      self._fail(f"expected {getattr(kind, 'value', kind)!r}")
    return self.consume()

  def expect_ident(self) -> Token:
    tk = self.peek()
    if tk.kind != TokenKind.IDENTIFIER or tk.text in KEYWORDS:
      self._fail("expected identifier")
    return self.consume()

  def _fail(self, message: str) -> NoReturn:
    cur = self.peek()
    found = "EOF" if cur.kind == TokenKind.EOF else repr(cur.text)
    raise SyntaxError(f"{self.filename}:{cur.line}:{cur.col}: {message}, found {found}")

  def _source(self, tokens: List[Token]) -> str:
    if not tokens:
      return ""
    return self.text[tokens[0].start : tokens[-1].end]

  # --- Grammar ---

  def parse(self) -> GoFile:
    while self.match(TokenKind.SEMICOLON):
      self.consume()
    if not self.match_keyword("package"):
      self._fail("expected 'package'")
    self.consume()
    go_file = GoFile(package_name=self.expect_ident().text, filename=self.filename)
    self._end_decl()

    while not self.match(TokenKind.EOF):
      if self.match(TokenKind.SEMICOLON):
        self.consume()
        continue
      tk = self.peek()
      if self.match_keyword("const"):
        go_file.decls.append(self.parse_gen_decl(self.parse_value_spec))
      elif self.match_keyword("type"):
        go_file.decls.append(self.parse_gen_decl(self.parse_type_spec))
      elif self.match_keyword("var") or self.match_keyword("import"):
        decl = GenDecl(keyword=tk.text, line=tk.line, doc=self.leads.get(self.pos))
        self.consume()
        decl.grouped = self.match(Symbol.LPAREN)
        self._skip_to_end()
        go_file.decls.append(decl)
      elif self.match_keyword("func"):
        self.consume()
        name = self.peek().text if self.peek().kind == TokenKind.IDENTIFIER else ""
        self._skip_to_end()
        go_file.decls.append(FuncDecl(line=tk.line, name=name))
      else:
        self._fail("expected declaration")
    return go_file

  def parse_gen_decl(self, parse_spec) -> GenDecl:
    doc = self.leads.get(self.pos)
    kw = self.consume()
    decl = GenDecl(keyword=kw.text, line=kw.line, doc=doc)
    if self.match(Symbol.LPAREN):
      self.consume()
      decl.grouped = True
      while not self.match(Symbol.RPAREN):
        if self.match(TokenKind.EOF):
          self._fail("expected ')'")
        if self.match(TokenKind.SEMICOLON):
          self.consume()
          continue
        decl.specs.append(parse_spec())
      self.expect(Symbol.RPAREN)
      self._end_decl()
    else:
      # an ungrouped value or type spec consumes its own terminator
      decl.specs.append(parse_spec())
    return decl

  def parse_value_spec(self) -> ValueSpec:
    doc = self.leads.get(self.pos)
    first = self.expect_ident()
    spec = ValueSpec(names=[first.text], line=first.line, doc=doc)
    while self.match(Symbol.COMMA):
      self.consume()
      spec.names.append(self.expect_ident().text)

    type_tokens = self._collect_until({Symbol.ASSIGN.value})
    spec.type_text = self._source(type_tokens)
    if len(type_tokens) == 1 and type_tokens[0].kind == TokenKind.IDENTIFIER:
      spec.type_ident = type_tokens[0].text

    if self.match(Symbol.ASSIGN):
      self.consume()
      spec.values = [self._source(part) for part in self._split_commas(self._collect_until(set()))]
      if not all(spec.values):
        self._fail("expected expression")
    self._end_spec()
    return spec

  def parse_type_spec(self) -> TypeSpec:
    doc = self.leads.get(self.pos)
    name = self.expect_ident()
    spec = TypeSpec(name=name.text, line=name.line, doc=doc)
    if self.match(Symbol.ASSIGN):
      self.consume()
      spec.alias = True
    rest = self._collect_until(set())
    if not rest:
      self._fail("expected type")
    if len(rest) == 1 and rest[0].kind == TokenKind.IDENTIFIER:
      spec.underlying = rest[0].text
    self._end_spec()
    return spec

  # --- Helpers ---

  def _end_spec(self) -> None:
    if self.match(TokenKind.SEMICOLON):
      self.consume()
    elif not self.match(Symbol.RPAREN):
      self._fail("expected ';' or ')'")

  def _end_decl(self) -> None:
    if self.match(TokenKind.SEMICOLON):
      self.consume()
    elif not self.match(TokenKind.EOF):
      self._fail("expected ';' or newline")

  def _collect_until(self, stops: set) -> List[Token]:
    """Consumes balanced tokens until a stop symbol, ';' or ')' at depth 0."""
    collected: List[Token] = []
    stack: List[str] = []
    while True:
      tk = self.peek()
      if tk.kind == TokenKind.EOF:
        if stack:
          self._fail(f"expected {stack[-1]!r}")
        return collected
      if not stack:
        if tk.kind == TokenKind.SEMICOLON or (tk.kind == TokenKind.OPERATOR and (tk.text in stops or tk.text == ")")):
          return collected
      if tk.kind == TokenKind.OPERATOR:
        if tk.text in OPENERS:
          stack.append(OPENERS[tk.text])
        elif tk.text in CLOSERS:
          if not stack or stack.pop() != tk.text:
            self._fail("unbalanced brackets")
      collected.append(self.consume())

  def _skip_to_end(self) -> None:
    stack: List[str] = []
    while True:
      tk = self.peek()
      if tk.kind == TokenKind.EOF:
        if stack:
          self._fail(f"expected {stack[-1]!r}")
        return
      if tk.kind == TokenKind.SEMICOLON and not stack:
        self.consume()
        return
      if tk.kind == TokenKind.OPERATOR:
        if tk.text in OPENERS:
          stack.append(OPENERS[tk.text])
        elif tk.text in CLOSERS:
          if not stack or stack.pop() != tk.text:
            self._fail("unbalanced brackets")
      self.consume()

  @staticmethod
  def _split_commas(tokens: List[Token]) -> List[List[Token]]:
    parts: List[List[Token]] = [[]]
    depth = 0
    for tk in tokens:
      if tk.kind == TokenKind.OPERATOR:
        if tk.text in OPENERS:
          depth += 1
        elif tk.text in CLOSERS:
          depth -= 1
        elif tk.text == Symbol.COMMA and depth == 0:
          parts.append([])
          continue
      parts[-1].append(tk)
    return parts


def parse_go_source(text: str, filename: str = "<input>") -> GoFile:
  """
  Parses one Go file.

  Args:
      text: Go source.
      filename: Name used in error messages.

  Returns:
      GoFile: The top-level declarations.

  Raises:
      SyntaxError: On malformed input.
  """
  return GoParser(text, filename).parse()
