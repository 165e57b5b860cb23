"""Standalone vocabulary building entry point."""

import logging

from .engine import MAX_ITERATIONS, CountingMode, MergeEngine, MergeResult, ModeName
from .units import TextUnit, UnitName

log = logging.getLogger(__name__)


def build_vocabulary(
    text: str,
    max_iterations: int = MAX_ITERATIONS,
    mode: "ModeName | CountingMode" = "incremental",
    unit: "UnitName | TextUnit" = "char",
    verbose: bool = False,
    show_progress: bool = True,
) -> MergeResult:
    """
    Build a subword vocabulary from ``text`` by iterative pair merging.

    An empty or single-unit text is not an error: the result simply reports
    zero iterations and the matching stop reason.

    :param text: Raw input text.
    :param max_iterations: Ceiling on the number of merges.
    :param mode: Best-pair selection, ``"incremental"`` or ``"rescan"``.
    :param unit: Unit of initial tokenization, ``"char"`` or ``"grapheme"``.
    :param verbose: Log each learned merge when ``True``.
    :param show_progress: Display a progress bar during merging when ``True``.
    :returns: Final vocabulary, chain, merge history and stop reason.
    :raises ConfigError: If an option is invalid.
    """
    engine = MergeEngine(
        text,
        max_iterations=max_iterations,
        mode=mode,
        unit=unit,
        verbose=verbose,
        show_progress=show_progress,
    )
    result = engine.run()

    if result.iterations < max_iterations and result.sequence.head is not None:
        log.debug(
            "no more pairs to merge after %d merges (ceiling %d)",
            result.iterations,
            max_iterations,
        )
    return result


__all__ = ["build_vocabulary"]
