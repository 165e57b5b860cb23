"""
Vocabulary registry: string values to unique, monotonically numbered tokens.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterator

from .errors import VocabularyError
from .types import PositionId, TokenId, TokenValue

if TYPE_CHECKING:
    from .sequence import Position

log = logging.getLogger(__name__)


@dataclass(eq=False)
class Token:
    """
    A distinct string unit of the vocabulary.

    ``occurrences`` holds the ids of the positions that reference this token.
    The chain owns those positions; ids of positions that were spliced out
    may linger here until the registry compacts the set.
    """

    id: TokenId
    value: TokenValue
    occurrences: set[PositionId] = field(default_factory=set, repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class Vocabulary:
    """
    Registry mapping string values to tokens.

    Ids are handed out in creation order and never reused. Tokens are never
    removed, so tokens that were merged away stay available for lookups even
    when no position references them any more.
    """

    def __init__(self) -> None:
        self._by_value: dict[TokenValue, Token] = {}
        self._by_id: dict[TokenId, Token] = {}
        self._next_id: TokenId = 0

    def get_or_create(self, value: TokenValue) -> Token:
        """
        Return the token for ``value``, creating it on first use.

        :param value: Non-empty string value of the token.
        :returns: The single token registered for ``value``.
        :raises VocabularyError: If ``value`` is empty.
        """
        if not value:
            raise VocabularyError("token value must be non-empty", value=value)

        tok = self._by_value.get(value)
        if tok is None:
            tok = Token(self._next_id, value)
            self._next_id += 1
            self._by_value[value] = tok
            self._by_id[tok.id] = tok
        return tok

    def register_occurrence(self, token: Token, position: "Position") -> None:
        """Record that ``position`` now references ``token``."""
        token.occurrences.add(position.id)

    def compact(self, token: Token, is_live: Callable[[PositionId], bool]) -> int:
        """
        Drop stale occurrence ids from ``token``.

        :param token: Token whose occurrence set is compacted.
        :param is_live: Predicate telling whether a position id is still in the chain.
        :returns: Number of ids dropped.
        """
        stale = {pid for pid in token.occurrences if not is_live(pid)}
        token.occurrences -= stale
        return len(stale)

    def lookup(self, value: TokenValue) -> Token | None:
        """Return the token registered for ``value``, if any."""
        return self._by_value.get(value)

    def __getitem__(self, token_id: TokenId) -> Token:
        try:
            return self._by_id[token_id]
        except KeyError:
            raise VocabularyError("unknown token", token_id=token_id) from None

    def __contains__(self, value: object) -> bool:
        return value in self._by_value

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Token]:
        # dicts keep insertion order, which is id order
        return iter(self._by_id.values())


__all__ = ["Token", "Vocabulary"]
