"""Tag Expression Evaluator — compiles tag policy text into a boolean expression tree.

Grammar (precedence NOT > AND > OR, AND/OR left-associative):

    expr    := and_expr (OR and_expr)*
    and_expr:= unary (AND unary)*
    unary   := NOT unary | primary
    primary := TAG | "(" expr ")"

    OR  is "OR" or "|"
    AND is "AND" or "&"
    NOT is "NOT" or "!"

Invariants:
    - Empty or whitespace-only text compiles to MatchAll (no tag restriction)
    - Malformed text raises TagExpressionError with the offending position
    - Compiled trees are frozen; evaluate() never raises

Design Decisions:
    - Hand-written recursive descent: the grammar is four productions
    - Keywords are upper-case only so lower-case tags named "and"/"or" stay literals
"""

from dataclasses import dataclass
from typing import AbstractSet, Iterable

from testgate.core.errors import TagExpressionError

_DELIMITERS = frozenset("()&|!")
_KEYWORDS = {"AND": "&", "OR": "|", "NOT": "!"}


# ─── Expression Tree ────────────────────────────────────────────

@dataclass(frozen=True)
class MatchAll:
    def evaluate(self, tags: AbstractSet[str]) -> bool:
        return True

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class TagLiteral:
    name: str

    def evaluate(self, tags: AbstractSet[str]) -> bool:
        return self.name in tags

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Not:
    operand: "TagExpression"

    def evaluate(self, tags: AbstractSet[str]) -> bool:
        return not self.operand.evaluate(tags)

    def __str__(self) -> str:
        return f"NOT {self.operand}"


@dataclass(frozen=True)
class And:
    left: "TagExpression"
    right: "TagExpression"

    def evaluate(self, tags: AbstractSet[str]) -> bool:
        return self.left.evaluate(tags) and self.right.evaluate(tags)

    def __str__(self) -> str:
        return f"({self.left} AND {self.right})"


@dataclass(frozen=True)
class Or:
    left: "TagExpression"
    right: "TagExpression"

    def evaluate(self, tags: AbstractSet[str]) -> bool:
        return self.left.evaluate(tags) or self.right.evaluate(tags)

    def __str__(self) -> str:
        return f"({self.left} OR {self.right})"


TagExpression = MatchAll | TagLiteral | Not | And | Or


# ─── Tokenizer ──────────────────────────────────────────────────

@dataclass(frozen=True)
class _Token:
    kind: str       # "tag", "&", "|", "!", "(", ")"
    text: str
    position: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch in _DELIMITERS:
            tokens.append(_Token(ch, ch, i))
            i += 1
            continue
        start = i
        while i < len(text) and not text[i].isspace() and text[i] not in _DELIMITERS:
            i += 1
        word = text[start:i]
        kind = _KEYWORDS.get(word, "tag")
        tokens.append(_Token(kind, word, start))
    return tokens


# ─── Parser ─────────────────────────────────────────────────────

class _Parser:
    def __init__(self, text: str):
        self._text = text
        self._tokens = _tokenize(text)
        self._index = 0

    def parse(self) -> TagExpression:
        expr = self._parse_or()
        token = self._peek()
        if token is not None:
            if token.kind == ")":
                raise self._error("unbalanced ')'", token.position)
            raise self._error(f"unexpected {token.text!r}", token.position)
        return expr

    def _peek(self) -> _Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _advance(self) -> _Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _error(self, message: str, position: int) -> TagExpressionError:
        return TagExpressionError(message, self._text, position)

    def _parse_or(self) -> TagExpression:
        left = self._parse_and()
        while (token := self._peek()) is not None and token.kind == "|":
            self._advance()
            left = Or(left, self._parse_and())
        return left

    def _parse_and(self) -> TagExpression:
        left = self._parse_unary()
        while (token := self._peek()) is not None and token.kind == "&":
            self._advance()
            left = And(left, self._parse_unary())
        return left

    def _parse_unary(self) -> TagExpression:
        token = self._peek()
        if token is not None and token.kind == "!":
            self._advance()
            return Not(self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> TagExpression:
        token = self._peek()
        if token is None:
            raise self._error("expected tag name, found end of input", len(self._text))
        if token.kind == "tag":
            self._advance()
            return TagLiteral(token.text)
        if token.kind == "(":
            self._advance()
            closing = self._peek()
            if closing is not None and closing.kind == ")":
                raise self._error("empty group", closing.position)
            inner = self._parse_or()
            closing = self._peek()
            if closing is None or closing.kind != ")":
                raise self._error("unbalanced '('", token.position)
            self._advance()
            return inner
        raise self._error(f"expected tag name, found {token.text!r}", token.position)


# ─── Public API ─────────────────────────────────────────────────

def compile_tag_expression(text: str | None) -> TagExpression:
    """Compile tag policy text. Empty text means no tag restriction."""
    if text is None or not text.strip():
        return MatchAll()
    return _Parser(text).parse()


def _any_of(tags: Iterable[str]) -> TagExpression | None:
    expr: TagExpression | None = None
    for name in tags:
        name = name.strip()
        if not name:
            continue
        literal = TagLiteral(name)
        expr = literal if expr is None else Or(expr, literal)
    return expr


def build_tag_policy(
    expression: str | None = None,
    include_tags: Iterable[str] = (),
    exclude_tags: Iterable[str] = (),
) -> TagExpression:
    """Combine a tag expression with include/exclude tag lists.

    Result is `expression AND (any include) AND NOT (any exclude)`,
    dropping whichever parts are absent.
    """
    parts: list[TagExpression] = []
    compiled = compile_tag_expression(expression)
    if not isinstance(compiled, MatchAll):
        parts.append(compiled)
    included = _any_of(include_tags)
    if included is not None:
        parts.append(included)
    excluded = _any_of(exclude_tags)
    if excluded is not None:
        parts.append(Not(excluded))

    if not parts:
        return MatchAll()
    policy = parts[0]
    for part in parts[1:]:
        policy = And(policy, part)
    return policy
