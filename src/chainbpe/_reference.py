"""
List-based reference of the merge rule.
"""

from typing_extensions import deprecated

from .types import PairCounts, TokenValue, ValuePair


@deprecated(
    "Reference implementation for documentation and tests only. Use `MergeEngine` instead."
)
def slow_pair_counts(values: list[TokenValue]) -> tuple[PairCounts, ValuePair | None]:
    """
    Count adjacent pairs and pick the first pair whose running count is
    strictly greater than the best so far.
    """
    counts: PairCounts = {}
    best: ValuePair | None = None
    best_count = 0
    for pair in zip(values, values[1:]):
        counts[pair] = counts.get(pair, 0) + 1
        if counts[pair] > best_count:
            best, best_count = pair, counts[pair]
    return counts, best


@deprecated(
    "Reference implementation for documentation and tests only. Use `MergeEngine` instead."
)
def slow_merge(values: list[TokenValue], target: ValuePair) -> list[TokenValue]:
    """Merge all occurrences of ``target`` left to right into one value."""
    merged: list[TokenValue] = []

    i = 0
    while i < len(values):
        # check if we can form a pair and it matches the target
        if i < len(values) - 1 and (values[i], values[i + 1]) == target:
            merged.append(values[i] + values[i + 1])
            i += 2
        else:
            merged.append(values[i])
            i += 1

    return merged


@deprecated(
    "Reference implementation for documentation and tests only. Use `MergeEngine` instead."
)
def slow_merge_history(values: list[TokenValue], max_iterations: int) -> list[ValuePair]:
    """
    Recount and merge until no pair is left or ``max_iterations`` is reached.

    O(n) per merge with a full recount every time. Returns the selected
    pairs in order.
    """
    history: list[ValuePair] = []
    while len(history) < max_iterations:
        _, best = slow_pair_counts(values)
        if best is None:
            break
        history.append(best)
        values = slow_merge(values, best)
    return history
