"""Whitespace tokenizer and the token cursor consumed by the parser."""

from collections import deque
from typing import Iterable, List, Optional


class TokenStream:
    """
    Ordered queue of report tokens, consumed strictly from the front.

    The stream only ever shrinks; tokens are never reordered or put back.
    """

    def __init__(self, tokens: Iterable[str]):
        self._tokens = deque(tokens)

    def peek(self, offset: int = 0) -> Optional[str]:
        """Return the token at ``offset`` from the front without consuming it."""
        if offset < len(self._tokens):
            return self._tokens[offset]
        return None

    def pop(self) -> str:
        """Consume and return the front token."""
        return self._tokens.popleft()

    def pop_many(self, count: int) -> List[str]:
        """Consume ``count`` tokens from the front."""
        if count > len(self._tokens):
            raise IndexError(f"Cannot consume {count} tokens, {len(self._tokens)} left")
        return [self._tokens.popleft() for _ in range(count)]

    def drain(self) -> List[str]:
        """Consume every remaining token."""
        remaining = list(self._tokens)
        self._tokens.clear()
        return remaining

    def remaining(self) -> List[str]:
        """Copy of the tokens still to be consumed."""
        return list(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __bool__(self) -> bool:
        return bool(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({' '.join(self._tokens)!r})"


def tokenize(text: str) -> TokenStream:
    """Split a raw report on whitespace."""
    return TokenStream(text.split())
