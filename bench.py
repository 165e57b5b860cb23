"""Benchmark incremental vs rescan pair selection of the merge engine."""

import argparse
import logging
import time

from chainbpe import MergeEngine
from datasets import load_dataset

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def format_bytes(num_bytes: int) -> str:
    """Format bytes to human-readable string."""
    size = float(num_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} TB"


def benchmark(text: str, mode: str, max_iterations: int) -> list[tuple[str, str]]:
    """Run one merge pass and print timing and compression stats."""
    print(f"\n--- mode={mode} ---")
    start = time.perf_counter()
    engine = MergeEngine(text, max_iterations=max_iterations, mode=mode, show_progress=True)
    build_time = time.perf_counter() - start
    n_initial = len(engine.sequence)

    start = time.perf_counter()
    result = engine.run()
    merge_time = time.perf_counter() - start

    n_final = len(result.sequence)
    print(f"   chain built in {build_time:.3f}s ({n_initial:,} positions)")
    print(f"   {result.iterations} merges in {merge_time:.3f}s ({result.reason.value})")
    print(f"   final positions: {n_final:,} ({n_initial / max(n_final, 1):.2f}x)")
    print(f"   final vocabulary: {len(result.final_vocabulary()):,} tokens")

    assert result.sequence.text() == text, "chain no longer spells the input"
    return [(r.left.value, r.right.value) for r in result.merges]


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the chainbpe merge engine.")
    parser.add_argument("--rows", type=int, default=200, help="Dataset rows to join.")
    parser.add_argument(
        "--max-iterations", type=int, default=500, help="Merge ceiling per run."
    )
    args = parser.parse_args()

    print("Loading dataset...")
    ds = load_dataset("stevez80/Sci-Fi-Books-gutenberg", split="train")
    text = "".join(ds[: args.rows]["text"])
    print(f"Text size: {format_bytes(len(text.encode('utf-8')))} ({len(text):,} chars)")

    incremental = benchmark(text, "incremental", args.max_iterations)
    rescan = benchmark(text, "rescan", args.max_iterations)
    assert incremental == rescan, "counting modes selected different merges"
    print("\nBoth modes selected the same merges.")


if __name__ == "__main__":
    main()
