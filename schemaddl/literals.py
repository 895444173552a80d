# File: schemaddl/literals.py
"""
schemaddl - Typed Column Default Literals
==========================================
Database drivers report column defaults as raw text: ``42``, ``"abc"``,
``'abc'``, ``NULL``, ``CURRENT_TIMESTAMP`` ...  This module classifies that
text into one of four immutable literal kinds and re-emits it either as SQL
or as a structured-document value.

    raw text ──parse_literal()──▶ Literal ──sql_literal()─────▶ SQL
                                          └─document_value()──▶ YAML / JSON

Classification never fails: text that is not null, quoted or numeric is a
``RawExpression``.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Any, List, Optional, Union

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemaddl.literals")

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_INTEGER_RE: re.Pattern[str] = re.compile(r"^-?\d+$")
_NUMERIC_RE: re.Pattern[str] = re.compile(
    r"^-?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?$"
)
_QUOTE_CHARS: str = "\"'"


class LiteralKind(str, Enum):
    """The closed set of literal classifications."""

    NULL = "null"
    NUMERIC = "numeric"
    QUOTED_STRING = "quoted_string"
    RAW_EXPRESSION = "raw_expression"


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class Literal:
    """
    Base class of the literal variants.

    Instances are immutable and compare equal when both kind and text match.
    """

    __slots__ = ("_text",)

    kind: LiteralKind

    def __init__(self, text: str = "") -> None:
        object.__setattr__(self, "_text", text)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def text(self) -> str:
        return self._text

    def sql_literal(self) -> str:
        """Render the literal as SQL source text."""
        return self._text

    def document_value(self) -> Any:
        """Render the literal as a YAML / JSON scalar."""
        return self._text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return self.kind is other.kind and self._text == other._text

    def __hash__(self) -> int:
        return hash((self.kind, self._text))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    def __str__(self) -> str:
        return self.sql_literal()


class Null(Literal):
    """The SQL ``null`` default."""

    __slots__ = ()

    kind = LiteralKind.NULL

    def __init__(self) -> None:
        super().__init__("null")

    def document_value(self) -> None:
        return None

    def __repr__(self) -> str:
        return "Null()"


class Numeric(Literal):
    """An integer or decimal number, kept verbatim."""

    __slots__ = ()

    kind = LiteralKind.NUMERIC

    @property
    def is_integer(self) -> bool:
        return _INTEGER_RE.match(self._text) is not None

    def document_value(self) -> Union[int, float, str]:
        """
        The number itself when it re-reads to the same text, else the text.

        ``1e999``, ``007`` or a 20-digit decimal cannot pass through a
        Python number unchanged, so they stay strings; a document string
        that looks numeric decodes back to ``Numeric``.
        """
        value: Union[int, float] = int(self._text) if self.is_integer else float(self._text)
        canonical: str = str(value) if isinstance(value, int) else repr(value)
        return value if canonical == self._text else self._text


class QuotedString(Literal):
    """
    A quoted string default.

    ``text`` holds the unquoted, unescaped value.  ``quote`` remembers the
    quote character the driver reported; it shapes the document display form
    but takes no part in equality.
    """

    __slots__ = ("_quote",)

    kind = LiteralKind.QUOTED_STRING

    def __init__(self, text: str, quote: str = '"') -> None:
        if quote not in _QUOTE_CHARS or len(quote) != 1:
            raise ValueError(f"Unsupported quote character: {quote!r}")
        super().__init__(text)
        object.__setattr__(self, "_quote", quote)

    @property
    def quote(self) -> str:
        return self._quote

    def sql_literal(self) -> str:
        return _wrap(self._text, '"')

    def document_value(self) -> str:
        return _wrap(self._text, self._quote)


class RawExpression(Literal):
    """A SQL expression or keyword such as ``CURRENT_TIMESTAMP``."""

    __slots__ = ()

    kind = LiteralKind.RAW_EXPRESSION


NULL: Null = Null()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _wrap(text: str, quote: str) -> str:
    return quote + text.replace(quote, quote * 2) + quote


def _unquote(raw: str) -> Optional[QuotedString]:
    if len(raw) < 2:
        return None
    quote: str = raw[0]
    if quote not in _QUOTE_CHARS or raw[-1] != quote:
        return None
    return QuotedString(raw[1:-1].replace(quote * 2, quote), quote)


def parse_literal(raw: str) -> Literal:
    """
    Classify driver-reported default text.

    Surrounding whitespace is ignored for classification.  Null, numeric and
    quoted values keep only their trimmed text; a raw expression keeps *raw*
    verbatim.

    Examples:
        >>> parse_literal("NULL")
        Null()
        >>> parse_literal('"it""s"')
        QuotedString('it"s')
        >>> parse_literal("-1.5")
        Numeric('-1.5')
        >>> parse_literal("CURRENT_TIMESTAMP")
        RawExpression('CURRENT_TIMESTAMP')
    """
    text: str = raw.strip()

    if text.lower() == "null":
        return NULL

    quoted: Optional[QuotedString] = _unquote(text)
    if quoted is not None:
        return quoted

    if _NUMERIC_RE.match(text):
        return Numeric(text)

    logger.debug("Default %r classified as raw expression.", raw)
    return RawExpression(raw)


__all__: List[str] = [
    "LiteralKind",
    "Literal",
    "Null",
    "Numeric",
    "QuotedString",
    "RawExpression",
    "NULL",
    "parse_literal",
]
