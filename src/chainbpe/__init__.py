"""chainbpe: subword vocabulary building by iterative pair merging."""

from ._progress import disable_progress, enable_progress
from .engine import (
    MAX_ITERATIONS,
    CountingMode,
    EngineState,
    MergeEngine,
    MergeRecord,
    MergeResult,
    StopReason,
    list_modes,
)
from .errors import ChainBPEError, ConfigError, SequenceError, VocabularyError
from .pairs import PairCounter
from .sequence import Position, Sequence
from .trainer import build_vocabulary
from .units import TextUnit, list_units
from .vocab import Token, Vocabulary

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("chainbpe")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "MAX_ITERATIONS",
    "Token",
    "Vocabulary",
    "Position",
    "Sequence",
    "PairCounter",
    "MergeEngine",
    "MergeRecord",
    "MergeResult",
    "EngineState",
    "StopReason",
    "CountingMode",
    "TextUnit",
    "ChainBPEError",
    "ConfigError",
    "SequenceError",
    "VocabularyError",
    "build_vocabulary",
    "enable_progress",
    "disable_progress",
    "list_modes",
    "list_units",
]
