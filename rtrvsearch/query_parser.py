"""Boolean query parsing: terms, phrases, proximity, fields, AND/OR/NOT and grouping."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, NamedTuple, Optional, Union

__all__ = [
    "AndNode",
    "FieldNode",
    "NodeType",
    "NotNode",
    "OrNode",
    "PhraseNode",
    "QueryNode",
    "QueryParseError",
    "TermNode",
    "extract_terms",
    "parse_query",
]


class QueryParseError(ValueError):
    """Raised when a query string does not follow the query grammar."""


class NodeType(Enum):
    """The kind of a node in a parsed query tree."""

    TERM = auto()
    PHRASE = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    FIELD = auto()


@dataclass
class TermNode:
    """A single search term."""

    term: str
    node_type: ClassVar[NodeType] = NodeType.TERM

    def __str__(self) -> str:
        return self.term


@dataclass
class PhraseNode:
    """An exact phrase, optionally allowing up to ``max_distance`` positions between words."""

    terms: list[str]
    max_distance: int = 0
    node_type: ClassVar[NodeType] = NodeType.PHRASE

    def __str__(self) -> str:
        text = '"' + " ".join(self.terms) + '"'
        if self.max_distance > 0:
            text += f"~{self.max_distance}"
        return text


@dataclass
class AndNode:
    """A conjunction: every child must match."""

    children: list[QueryNode] = field(default_factory=list)
    node_type: ClassVar[NodeType] = NodeType.AND

    def __str__(self) -> str:
        return "AND(" + ", ".join(str(child) for child in self.children) + ")"


@dataclass
class OrNode:
    """A disjunction: at least one child must match."""

    children: list[QueryNode] = field(default_factory=list)
    node_type: ClassVar[NodeType] = NodeType.OR

    def __str__(self) -> str:
        return "OR(" + ", ".join(str(child) for child in self.children) + ")"


@dataclass
class NotNode:
    """A negation of its child."""

    child: QueryNode
    node_type: ClassVar[NodeType] = NodeType.NOT

    def __str__(self) -> str:
        return f"NOT({self.child})"


@dataclass
class FieldNode:
    """A query restricted to one document field."""

    field_name: str
    query: Optional[QueryNode]
    node_type: ClassVar[NodeType] = NodeType.FIELD

    def __str__(self) -> str:
        inner = "" if self.query is None else str(self.query)
        return f"{self.field_name}:{inner}"


QueryNode = Union[TermNode, PhraseNode, AndNode, OrNode, NotNode, FieldNode]


class _Kind(Enum):
    WORD = auto()
    NUMBER = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    LPAREN = auto()
    RPAREN = auto()
    COLON = auto()
    TILDE = auto()
    QUOTE = auto()
    END = auto()


class _Tok(NamedTuple):
    kind: _Kind
    value: str


_END = _Tok(_Kind.END, "")
_MAX_PROXIMITY = 2**31 - 1

# Characters that match nothing here are skipped.
_TOKEN_RE = re.compile(r"(?P<number>[0-9]+)|(?P<word>[A-Za-z0-9_]+)|(?P<punct>[():~\"])")

_PUNCT_KINDS = {
    "(": _Kind.LPAREN,
    ")": _Kind.RPAREN,
    ":": _Kind.COLON,
    "~": _Kind.TILDE,
    '"': _Kind.QUOTE,
}
_OPERATORS = {"AND": _Kind.AND, "OR": _Kind.OR, "NOT": _Kind.NOT}
_IMPLICIT_AND_STARTS = frozenset({_Kind.WORD, _Kind.QUOTE, _Kind.LPAREN, _Kind.NOT})


def _tokenize(query_string: str) -> list[_Tok]:
    tokens: list[_Tok] = []
    for match in _TOKEN_RE.finditer(query_string):
        if match.lastgroup == "number":
            tokens.append(_Tok(_Kind.NUMBER, match.group()))
        elif match.lastgroup == "punct":
            tokens.append(_Tok(_PUNCT_KINDS[match.group()], match.group()))
        else:
            word = match.group()
            operator = _OPERATORS.get(word.upper())
            if operator is not None:
                tokens.append(_Tok(operator, word))
            else:
                tokens.append(_Tok(_Kind.WORD, word.lower()))
    tokens.append(_END)
    return tokens


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: list[_Tok]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> _Tok:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else _END

    def _advance(self) -> _Tok:
        token = self._peek()
        if self._pos < len(self._tokens):
            self._pos += 1
        return token

    def _match(self, kind: _Kind) -> bool:
        if self._peek().kind is kind:
            self._advance()
            return True
        return False

    def _at_end(self) -> bool:
        return self._peek().kind is _Kind.END

    def expression(self) -> Optional[QueryNode]:
        # expr ::= term_expr ((AND)? term_expr)*
        if self._at_end():
            return None
        left = self.term_expression()
        if left is None:
            return None
        while not self._at_end() and self._peek().kind is not _Kind.RPAREN:
            if not (self._match(_Kind.AND) or self._peek().kind in _IMPLICIT_AND_STARTS):
                break
            right = self.term_expression()
            if right is None:
                break
            if isinstance(left, AndNode):
                left.children.append(right)
            else:
                left = AndNode([left, right])
        return left

    def term_expression(self) -> Optional[QueryNode]:
        # term_expr ::= factor (OR factor)*
        left = self.factor()
        if left is None:
            return None
        while self._match(_Kind.OR):
            right = self.factor()
            if right is None:
                break
            if isinstance(left, OrNode):
                left.children.append(right)
            else:
                left = OrNode([left, right])
        return left

    def factor(self) -> Optional[QueryNode]:
        # factor ::= NOT? atom
        if self._match(_Kind.NOT):
            child = self.atom()
            if child is None:
                raise QueryParseError("expected expression after NOT")
            return NotNode(child)
        return self.atom()

    def atom(self) -> Optional[QueryNode]:
        # atom ::= '(' expr ')' | phrase | field ':' (term | phrase) | term
        if self._match(_Kind.LPAREN):
            inner = self.expression()
            if not self._match(_Kind.RPAREN):
                raise QueryParseError("expected closing parenthesis")
            return inner
        if self._peek().kind is _Kind.QUOTE:
            return self.phrase()
        if (
            self._peek().kind is _Kind.WORD
            and self._pos + 1 < len(self._tokens)
            and self._tokens[self._pos + 1].kind is _Kind.COLON
        ):
            return self.fielded_term()
        return self.term()

    def phrase(self) -> PhraseNode:
        if not self._match(_Kind.QUOTE):
            raise QueryParseError("expected opening quote")
        terms: list[str] = []
        while self._peek().kind is _Kind.WORD:
            terms.append(self._advance().value)
        if not self._match(_Kind.QUOTE):
            raise QueryParseError("expected closing quote")
        if not terms:
            raise QueryParseError("empty phrase query")
        proximity = 0
        if self._match(_Kind.TILDE) and self._peek().kind is _Kind.NUMBER:
            proximity = int(self._advance().value)
            if proximity > _MAX_PROXIMITY:
                raise QueryParseError("proximity out of range")
        return PhraseNode(terms, proximity)

    def fielded_term(self) -> FieldNode:
        field_name = self._advance().value
        if not self._match(_Kind.COLON):
            raise QueryParseError("expected colon after field name")
        query = self.phrase() if self._peek().kind is _Kind.QUOTE else self.term()
        return FieldNode(field_name, query)

    def term(self) -> Optional[TermNode]:
        if self._peek().kind is not _Kind.WORD:
            return None
        return TermNode(self._advance().value)


def parse_query(query_string: str) -> QueryNode:
    """Parse ``query_string`` into a query tree.

    An empty query gives an empty term; a query that does not parse is
    returned whole as a single term.
    """
    if not query_string:
        return TermNode("")
    try:
        result = _Parser(_tokenize(query_string)).expression()
    except QueryParseError:
        return TermNode(query_string)
    return TermNode("") if result is None else result


_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_SPACE = frozenset(" \t\n\v\f\r")
_PUNCTUATION = frozenset(string.punctuation)
_OPERATOR_WORDS = frozenset({"and", "or", "not"})


def extract_terms(query_string: str) -> list[str]:
    """Return the lower-cased search terms of a query, dropping boolean operators.

    Text between double quotes is kept as one term, spaces included.
    """
    terms: list[str] = []
    current: list[str] = []
    in_quotes = False

    def flush() -> None:
        if current:
            term = "".join(current)
            if term not in _OPERATOR_WORDS:
                terms.append(term)
            current.clear()

    for char in query_string:
        if char == '"':
            in_quotes = not in_quotes
        elif in_quotes:
            current.append(char.translate(_ASCII_LOWER))
        elif char in _SPACE or char in _PUNCTUATION:
            flush()
        else:
            current.append(char.translate(_ASCII_LOWER))
    flush()
    return terms