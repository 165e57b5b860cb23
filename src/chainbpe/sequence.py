"""
Doubly-linked position chain holding the current tokenization of a text.
"""

import logging
from dataclasses import dataclass
from typing import Iterator

from .errors import SequenceError
from .types import PositionId, TokenId, TokenValue
from .units import TextUnit, UnitName
from .vocab import Token, Vocabulary

log = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Position:
    """
    One slot of the chain.

    ``prev`` and ``next`` are position ids rather than references, so a
    position never keeps its neighbours alive. ``start`` is the character
    offset of the first input unit covered by this position.
    """

    id: PositionId
    token: Token
    start: int
    prev: PositionId | None = None
    next: PositionId | None = None


class Sequence:
    """
    Arena of positions forming a single linear chain.

    Positions live in ``_positions`` while they are part of the chain; a
    splice removes the replaced positions from the arena, which is how the
    rest of the package tells live positions from stale ids.
    """

    def __init__(self, vocab: Vocabulary) -> None:
        self.vocab = vocab
        self.head: PositionId | None = None
        self._tail: PositionId | None = None
        self._positions: dict[PositionId, Position] = {}
        self._next_id: PositionId = 0

    @classmethod
    def build_from_text(
        cls,
        text: str,
        vocab: Vocabulary,
        unit: "UnitName | TextUnit" = "char",
    ) -> "Sequence":
        """
        Tokenize ``text`` one unit at a time into a fresh chain.

        :param text: Raw input text.
        :param vocab: Registry used to get or create one token per distinct unit.
        :param unit: Unit of initial tokenization, ``"char"`` or ``"grapheme"``.
        :returns: The chain; its ``head`` is ``None`` when ``text`` is empty.
        """
        seq = cls(vocab)
        offset = 0
        for piece in TextUnit.get(unit).split(text):
            tok = vocab.get_or_create(piece)
            seq._append(seq.new_position(tok, offset))
            offset += len(piece)

        log.debug(
            "built chain of %d positions over %d distinct units",
            len(seq),
            len(vocab),
        )
        return seq

    def new_position(self, token: Token, start: int) -> Position:
        """Create an unlinked position for ``token`` and register the occurrence."""
        pos = Position(self._next_id, token, start)
        self._next_id += 1
        self._positions[pos.id] = pos
        self.vocab.register_occurrence(token, pos)
        return pos

    def _append(self, pos: Position) -> None:
        if self._tail is None:
            self.head = pos.id
        else:
            pos.prev = self._tail
            self._positions[self._tail].next = pos.id
        self._tail = pos.id

    def splice(self, left: Position, new: Position, right: Position) -> Position:
        """
        Replace the adjacent run ``left, right`` with ``new``.

        The predecessor of ``left`` and the successor of ``right`` are
        rewired to ``new``. When ``left`` was the head, ``new`` becomes the
        head. ``left`` and ``right`` leave the arena; their own links are
        left untouched.

        :raises SequenceError: If the positions are not live or not adjacent.
        """
        for pos in (left, right, new):
            if pos.id not in self._positions:
                raise SequenceError("position is not live", position_id=pos.id)
        if left.next != right.id:
            raise SequenceError("splice bounds are not adjacent", position_id=left.id)

        new.prev = left.prev
        new.next = right.next

        if left.prev is None:
            self.head = new.id
        else:
            self._positions[left.prev].next = new.id

        if right.next is None:
            self._tail = new.id
        else:
            self._positions[right.next].prev = new.id

        del self._positions[left.id]
        del self._positions[right.id]
        return new

    def iterate(self, start: PositionId | None = None) -> Iterator[Position]:
        """
        Walk the chain forward from ``start`` (the head by default) to the tail.

        Every call returns a fresh generator, so a walk can be restarted from
        any live position.
        """
        if start is None:
            node = self.head
        elif start in self._positions:
            node = start
        else:
            raise SequenceError("cannot iterate from a dead position", position_id=start)

        while node is not None:
            pos = self._positions[node]
            yield pos
            node = pos.next

    def __iter__(self) -> Iterator[Position]:
        return self.iterate()

    def __getitem__(self, position_id: PositionId) -> Position:
        try:
            return self._positions[position_id]
        except KeyError:
            raise SequenceError("unknown position", position_id=position_id) from None

    def __contains__(self, position_id: object) -> bool:
        return position_id in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def next_of(self, pos: Position) -> Position | None:
        """Return the successor of ``pos``, if any."""
        return None if pos.next is None else self._positions[pos.next]

    def prev_of(self, pos: Position) -> Position | None:
        """Return the predecessor of ``pos``, if any."""
        return None if pos.prev is None else self._positions[pos.prev]

    def values(self) -> list[TokenValue]:
        """Token values in chain order."""
        return [pos.token.value for pos in self.iterate()]

    def token_ids(self) -> list[TokenId]:
        """Token ids in chain order, as consumed by positional encoders."""
        return [pos.token.id for pos in self.iterate()]

    def tokens(self) -> set[Token]:
        """Distinct tokens reachable from the head."""
        return {pos.token for pos in self.iterate()}

    def text(self) -> str:
        """Concatenate the chain back into the original text."""
        return "".join(self.values())


__all__ = ["Position", "Sequence"]
