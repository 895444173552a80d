# File: schemaddl/actions.py
"""
schemaddl - Foreign-Key Referential Actions
============================================
``ForeignKeyAction`` and its canonical lowercase SQL phrases.

``ACTION_PHRASES`` is the single source of truth: the SQL renderer, the
text codec, the JSON (pydantic) hooks and the YAML representer all go through
``action_phrase`` / ``parse_action``.  The table is a bijection; it is
checked once at import time.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Tuple

from schemaddl.errors import InvalidForeignKeyActionError

logger: logging.Logger = logging.getLogger("schemaddl.actions")


class ForeignKeyAction(int, Enum):
    """ON DELETE / ON UPDATE behaviour.  ``UNSET`` renders no clause."""

    UNSET = 0
    SET_NULL = 1
    SET_DEFAULT = 2
    CASCADE = 3
    RESTRICT = 4
    NO_ACTION = 5

    def __str__(self) -> str:
        return action_phrase(self)

    def to_text(self) -> bytes:
        """Text-codec encode path."""
        return action_phrase(self).encode("utf-8")

    @classmethod
    def from_text(cls, data: bytes) -> "ForeignKeyAction":
        """Text-codec decode path."""
        try:
            text: str = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidForeignKeyActionError(data) from exc
        return parse_action(text)


ACTION_PHRASES: Tuple[Tuple[ForeignKeyAction, str], ...] = (
    (ForeignKeyAction.UNSET, ""),
    (ForeignKeyAction.SET_NULL, "set null"),
    (ForeignKeyAction.SET_DEFAULT, "set default"),
    (ForeignKeyAction.CASCADE, "cascade"),
    (ForeignKeyAction.RESTRICT, "restrict"),
    (ForeignKeyAction.NO_ACTION, "no action"),
)

_PHRASE_BY_ACTION: Dict[ForeignKeyAction, str] = dict(ACTION_PHRASES)
_ACTION_BY_PHRASE: Dict[str, ForeignKeyAction] = {p: a for a, p in ACTION_PHRASES}

if len(_PHRASE_BY_ACTION) != len(ACTION_PHRASES) or len(_ACTION_BY_PHRASE) != len(
    ACTION_PHRASES
):
    raise RuntimeError("ACTION_PHRASES must map actions and phrases one-to-one.")
if set(_PHRASE_BY_ACTION) != set(ForeignKeyAction):
    raise RuntimeError("ACTION_PHRASES must cover every ForeignKeyAction.")


def action_phrase(action: Any) -> str:
    """
    Return the SQL phrase for *action*.

    Raises:
        InvalidForeignKeyActionError: *action* is not a ``ForeignKeyAction``.
    """
    if not isinstance(action, ForeignKeyAction):
        raise InvalidForeignKeyActionError(action)
    return _PHRASE_BY_ACTION[action]


def parse_action(value: Any) -> ForeignKeyAction:
    """
    Decode a stored action.

    Accepts a ``ForeignKeyAction`` as-is or one of the canonical phrases
    (``""`` decodes to ``UNSET``).  Anything else is rejected; there is no
    fallback to a default action.
    """
    if isinstance(value, ForeignKeyAction):
        return value
    if isinstance(value, str):
        action = _ACTION_BY_PHRASE.get(value)
        if action is not None:
            return action
    logger.debug("Rejected foreign key action %r.", value)
    raise InvalidForeignKeyActionError(value)


__all__: List[str] = [
    "ForeignKeyAction",
    "ACTION_PHRASES",
    "action_phrase",
    "parse_action",
]
