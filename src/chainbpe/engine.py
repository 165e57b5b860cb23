"""
Merge engine: repeatedly merge the most frequent adjacent token pair.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from operator import attrgetter
from typing import Final, Literal

from tqdm import tqdm

from ._decorators import measure_time
from ._progress import _is_enabled
from ._sanitise import render_pair, render_value
from .errors import ConfigError
from .pairs import PairCounter, TokenPair
from .sequence import Position, Sequence
from .types import TokenId
from .units import TextUnit, UnitName
from .vocab import Token, Vocabulary

log = logging.getLogger(__name__)

MAX_ITERATIONS: Final[int] = 500

ModeName = Literal["incremental", "rescan"]


class EngineState(str, Enum):
    """Lifecycle of a merge run."""

    RUNNING = "running"
    DONE = "done"


class StopReason(str, Enum):
    """Why a merge run ended. None of these is an error."""

    EMPTY = "empty"
    EXHAUSTED = "exhausted"
    ITERATION_LIMIT = "iteration-limit"


class CountingMode(str, Enum):
    """
    How the next best pair is found after a merge.

    ``INCREMENTAL`` selects from the counts patched during the merge;
    ``RESCAN`` recounts the whole chain. Both pick the same pairs.
    """

    INCREMENTAL = "incremental"
    RESCAN = "rescan"

    @classmethod
    def get(cls, name: "str | CountingMode") -> "CountingMode":
        """Get counting mode by name (case-insensitive)."""
        if isinstance(name, CountingMode):
            return name
        try:
            return cls[name.upper()]
        except KeyError:
            raise ConfigError(
                "unknown counting mode",
                invalid_name=name,
                available=list_modes(),
            )


def list_modes() -> list[str]:
    """Return available counting mode names."""
    return [mode.value for mode in CountingMode]


@dataclass(frozen=True)
class MergeRecord:
    """One applied merge."""

    left: Token
    right: Token
    merged: Token
    count: int


@dataclass
class MergeResult:
    """Final state of a merge run, handed to downstream consumers."""

    vocab: Vocabulary
    sequence: Sequence
    merges: list[MergeRecord] = field(default_factory=list)
    iterations: int = 0
    # None while the engine that produced it is still running
    reason: StopReason | None = None

    @property
    def head(self) -> Position | None:
        """First position of the final chain, ``None`` for empty input."""
        if self.sequence.head is None:
            return None
        return self.sequence[self.sequence.head]

    def final_vocabulary(self) -> set[Token]:
        """Distinct tokens with at least one surviving position."""
        return self.sequence.tokens()

    def token_ids(self) -> list[TokenId]:
        """Token ids of the final chain in order."""
        return self.sequence.token_ids()


class MergeEngine:
    """
    Pair-merging loop over a position chain.

    The chain, the registry and the pair counts are owned by one engine and
    mutated in place. The counts are cumulative across iterations: each merge
    patches the pairs it destroys and creates instead of recounting.

    Example:
       >>> engine = MergeEngine("aaab")
       >>> result = engine.run()
       >>> result.sequence.values()
       ['aaab']
    """

    def __init__(
        self,
        text: str,
        *,
        max_iterations: int = MAX_ITERATIONS,
        mode: "ModeName | CountingMode" = "incremental",
        unit: "UnitName | TextUnit" = "char",
        verbose: bool = False,
        show_progress: bool = False,
    ) -> None:
        """
        Tokenize ``text`` into a fresh chain ready for merging.

        :param text: Raw input text.
        :param max_iterations: Ceiling on the number of merges.
        :param mode: ``"incremental"`` or ``"rescan"`` best-pair selection.
        :param unit: Unit of initial tokenization, ``"char"`` or ``"grapheme"``.
        :param verbose: Log each merge at INFO level when ``True``.
        :param show_progress: Draw a progress bar while running.
        :raises ConfigError: If ``max_iterations`` is not positive or a name is unknown.
        """
        if max_iterations < 1:
            raise ConfigError(f"max_iterations must be positive (got {max_iterations})")

        self.max_iterations = max_iterations
        self.mode = CountingMode.get(mode)
        self.verbose = verbose
        self.show_progress = show_progress

        self.vocab = Vocabulary()
        self.sequence = Sequence.build_from_text(text, self.vocab, unit)
        self.pairs = PairCounter()

        self.state = EngineState.RUNNING
        self.reason: StopReason | None = None
        self.iterations = 0
        self.merges: list[MergeRecord] = []
        self._best: TokenPair | None = None
        self._seeded = False

    @property
    def done(self) -> bool:
        return self.state is EngineState.DONE

    def step(self) -> bool:
        """
        Run one iteration of the loop.

        :returns: ``True`` if a merge was applied, ``False`` once the run is done.
        """
        if self.done:
            return False

        self._seed()

        if self._best is None:
            if self.sequence.head is None:
                self._finish(StopReason.EMPTY)
            else:
                self._finish(StopReason.EXHAUSTED)
            return False

        if self.iterations >= self.max_iterations:
            self._finish(StopReason.ITERATION_LIMIT)
            return False

        left, right = self._best
        self.merge(left, right)
        self.iterations += 1
        return True

    @measure_time
    def run(self) -> MergeResult:
        """Merge until the run is done and return the final state."""
        enabled = self.show_progress and _is_enabled()
        with tqdm(
            total=self.max_iterations, desc="merging", unit="merge", disable=not enabled
        ) as bar:
            while self.step():
                bar.update(1)
        return self.result()

    def result(self) -> MergeResult:
        """Snapshot the current state; ``reason`` stays ``None`` until the run is done."""
        return MergeResult(
            vocab=self.vocab,
            sequence=self.sequence,
            merges=list(self.merges),
            iterations=self.iterations,
            reason=self.reason,
        )

    def merge(self, token_a: Token, token_b: Token) -> MergeRecord:
        """
        Merge every eligible ``token_a, token_b`` occurrence into one position.

        Occurrences of ``token_a`` are snapshotted in chain order before the
        chain is touched. An occurrence already consumed by an earlier splice
        in the same merge is skipped, so runs like ``a a a`` merge from the
        left. For every splice the pairs around it are patched: the merged
        pair and the two boundary pairs lose one, the new boundary pairs
        gain one.

        The best pair is reselected afterwards, so a direct call leaves the
        engine ready for the next :meth:`step`.

        :param token_a: Left token of the pair.
        :param token_b: Right token of the pair.
        :returns: Record of the merge with the number of occurrences merged.
        """
        a_val, b_val = token_a.value, token_b.value
        self._seed()
        # equal values share one token, so value-keyed pair counts stay exact
        merged = self.vocab.get_or_create(a_val + b_val)
        merge_pair = (a_val, b_val)

        self.vocab.compact(token_a, self.sequence.__contains__)
        snapshot = sorted(
            (self.sequence[pid] for pid in token_a.occurrences), key=attrgetter("start")
        )

        n_merged = 0
        for pos in snapshot:
            if pos.id not in self.sequence:
                continue
            nxt = self.sequence.next_of(pos)
            if nxt is None or nxt.token != token_b:
                continue

            new = self.sequence.new_position(merged, pos.start)
            self.pairs.adjust(merge_pair, -1)

            before = self.sequence.prev_of(pos)
            if before is not None:
                self.pairs.adjust((before.token.value, a_val), -1)
                self.pairs.adjust((before.token.value, merged.value), 1)

            after = self.sequence.next_of(nxt)
            if after is not None:
                self.pairs.adjust((b_val, after.token.value), -1)
                self.pairs.adjust((merged.value, after.token.value), 1)

            self.sequence.splice(pos, new, nxt)
            n_merged += 1

        self.pairs.prune()
        if self.pairs[merge_pair] != 0:
            log.warning(
                "pair %s keeps count %d after merge",
                render_pair(a_val, b_val),
                self.pairs[merge_pair],
            )

        record = MergeRecord(token_a, token_b, merged, n_merged)
        self.merges.append(record)
        self._best = self._select()

        if self.verbose:
            log.info(
                "merge %d/%d: %s -> %r (%d occurrences)",
                len(self.merges),
                self.max_iterations,
                render_pair(a_val, b_val),
                render_value(merged.value),
                n_merged,
            )
        else:
            log.debug(
                "merged %s into token %d (%d occurrences)",
                render_pair(a_val, b_val),
                merged.id,
                n_merged,
            )
        return record

    def _seed(self) -> None:
        # only the first iteration counts the whole chain
        if not self._seeded:
            self._best = self.pairs.scan(self.sequence)
            self._seeded = True

    def _select(self) -> TokenPair | None:
        match self.mode:
            case CountingMode.INCREMENTAL:
                return self.pairs.best(self.sequence)
            case CountingMode.RESCAN:
                return self.pairs.scan(self.sequence)

    def _finish(self, reason: StopReason) -> None:
        self.state = EngineState.DONE
        self.reason = reason
        log.info(
            "merge loop ended after %d iterations (%s), %d positions left",
            self.iterations,
            reason.value,
            len(self.sequence),
        )


__all__ = [
    "MAX_ITERATIONS",
    "ModeName",
    "EngineState",
    "StopReason",
    "CountingMode",
    "MergeRecord",
    "MergeResult",
    "MergeEngine",
    "list_modes",
]
