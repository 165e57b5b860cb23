"""Command line driver: build a vocabulary from a text file and dump the chain."""

import argparse
import logging
import sys
from pathlib import Path

from ._progress import disable_progress
from ._sanitise import render_value
from .engine import MAX_ITERATIONS, list_modes
from .errors import ChainBPEError
from .trainer import build_vocabulary
from .units import list_units

log = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chainbpe",
        description="Build a subword vocabulary from a text file by pair merging.",
    )
    parser.add_argument("path", type=Path, help="Text file to tokenize.")
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=MAX_ITERATIONS,
        help="Ceiling on the number of merges.",
    )
    parser.add_argument(
        "--mode",
        choices=list_modes(),
        default="incremental",
        help="Best-pair selection after each merge.",
    )
    parser.add_argument(
        "--unit",
        choices=list_units(),
        default="char",
        help="Unit of initial tokenization.",
    )
    parser.add_argument(
        "--encoding", default="utf-8", help="Encoding used to read the input file."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every merge."
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Do not draw a progress bar."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the driver and return the process exit status."""
    args = _parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    if args.no_progress:
        disable_progress()

    try:
        text = args.path.read_text(encoding=args.encoding)
        result = build_vocabulary(
            text,
            max_iterations=args.max_iterations,
            mode=args.mode,
            unit=args.unit,
            verbose=args.verbose,
            show_progress=not args.no_progress,
        )
    except (ChainBPEError, OSError, UnicodeDecodeError) as e:
        log.error("%s", e)
        return 1

    if result.head is None:
        log.warning("no tokens: %s is empty", args.path)
        return 0

    for tok in sorted(result.final_vocabulary(), key=lambda t: t.id):
        print(render_value(tok.value))

    for pos in result.sequence.iterate():
        print(f"{render_value(pos.token.value)} -> {pos.id} {pos.token.id}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
