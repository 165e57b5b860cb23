"""
Pair-frequency tracking over adjacent token values.
"""

import logging
from collections import Counter
from typing import TYPE_CHECKING

from ._sanitise import render_pair
from .types import PairCounts, ValuePair
from .vocab import Token

if TYPE_CHECKING:
    from .sequence import Sequence

log = logging.getLogger(__name__)

type TokenPair = tuple[Token, Token]


class PairCounter:
    """
    Counts of adjacent ``(left value, right value)`` pairs in a chain.

    Counts are plain ints and may briefly go negative while a merge is being
    applied; nothing here clamps them at zero.
    """

    def __init__(self) -> None:
        self.counts: PairCounts = {}

    def scan(self, sequence: "Sequence") -> TokenPair | None:
        """
        Recount every adjacent pair of ``sequence`` from scratch.

        The best pair is the first one whose running count is strictly
        greater than the best seen so far, so among pairs with the same
        final count the one that reaches it first, left to right, wins.

        :param sequence: Chain to walk from its head.
        :returns: The best ``(left, right)`` token pair, or ``None`` when the
            chain has fewer than two positions.
        """
        self.counts = {}
        best: TokenPair | None = None
        best_count = 0

        prev = None
        for pos in sequence.iterate():
            if prev is not None:
                pair = (prev.token.value, pos.token.value)
                count = self.counts.get(pair, 0) + 1
                self.counts[pair] = count
                if count > best_count:
                    best = (prev.token, pos.token)
                    best_count = count
            prev = pos

        return best

    def best(self, sequence: "Sequence") -> TokenPair | None:
        """
        Select the best pair from the tracked counts without recounting.

        Uses the same rule as :meth:`scan`: among pairs holding the highest
        count, the first to reach that count in a left-to-right walk wins.
        Only pairs at the highest count are tallied during the walk.
        """
        top = max(self.counts.values(), default=0)
        if top <= 0:
            return None

        tally: Counter[ValuePair] = Counter()
        prev = None
        for pos in sequence.iterate():
            if prev is not None:
                pair = (prev.token.value, pos.token.value)
                if self.counts.get(pair) == top:
                    tally[pair] += 1
                    if tally[pair] == top:
                        return (prev.token, pos.token)
            prev = pos

        log.warning("tracked pair counts disagree with the chain, rescanning")
        return self.scan(sequence)

    def adjust(self, pair: ValuePair, delta: int) -> int:
        """Add ``delta`` to the count of ``pair`` and return the new count."""
        count = self.counts.get(pair, 0) + delta
        self.counts[pair] = count
        return count

    def prune(self) -> None:
        """Drop pairs whose count fell to zero."""
        for pair in [k for k, v in self.counts.items() if v == 0]:
            del self.counts[pair]

        for (left, right), count in self.counts.items():
            if count < 0:
                log.warning(
                    "negative count %d left for pair %s", count, render_pair(left, right)
                )

    def as_dict(self) -> PairCounts:
        """Return a copy of the current counts."""
        return dict(self.counts)

    def __getitem__(self, pair: ValuePair) -> int:
        return self.counts.get(pair, 0)

    def __len__(self) -> int:
        return len(self.counts)


__all__ = ["TokenPair", "PairCounter"]
