"""Replay buffer for captured event sequences."""

from typing import Iterator, Optional, Sequence

from .events import Token


class TokenReplay:
    """Token source replaying a captured event sequence verbatim.

    This is what ``Data.reader()`` returns: custom attribute payloads are kept
    as raw events, and a replay lets callers feed them to any consumer that
    accepts a token source, including another decoder.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._position = 0

    def token(self) -> Optional[Token]:
        """Return the next captured event, or None once all were replayed."""
        if self._position >= len(self._tokens):
            return None
        tok = self._tokens[self._position]
        self._position += 1
        return tok

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._position

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.token()
            if tok is None:
                return
            yield tok
