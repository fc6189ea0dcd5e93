"""Top-level splitting of token sequences at separator characters."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from cellcalc.formulas.errors import MalformedParenthesesError
from cellcalc.formulas.tokens import Token


class Segment(NamedTuple):
    """A run of tokens between two top-level separators.

    Attributes:
        tokens: The tokens of the run (possibly empty).
        separator: The separator token that ended the run, or ``None`` for
            the trailing run.
    """

    tokens: tuple[Token, ...]
    separator: Token | None


def split_tokens(tokens: Sequence[Token], separators: str) -> list[Segment]:
    """Split *tokens* at separators that sit outside any parentheses.

    Args:
        tokens: The token sequence to split.
        separators: Characters that split at nesting depth 0, e.g. ``"+-"``.

    Returns:
        The segments in order. A leading or doubled separator yields an
        empty segment. A trailing run is only included when non-empty, so
        ``1 +`` gives one segment terminated by ``+`` and an empty input
        gives no segments at all.

    Raises:
        MalformedParenthesesError: If a ``)`` closes more than was opened,
            or the parentheses are unbalanced at the end.
    """
    segments: list[Segment] = []
    current: list[Token] = []
    open_count = 0
    close_count = 0

    for token in tokens:
        if token.is_char("("):
            open_count += 1
        elif token.is_char(")"):
            close_count += 1
            if close_count > open_count:
                raise MalformedParenthesesError()

        if open_count == close_count and len(token.value) == 1 and token.value in separators:
            segments.append(Segment(tuple(current), token))
            current = []
        else:
            current.append(token)

    if open_count != close_count:
        raise MalformedParenthesesError()

    if current:
        segments.append(Segment(tuple(current), None))

    return segments
