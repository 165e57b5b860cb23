"""Custom exception hierarchy for chainbpe errors."""

from .types import PositionId, TokenId


class ChainBPEError(Exception):
    """Base exception for all chainbpe errors."""


class VocabularyError(ChainBPEError):
    """Raised when vocabulary operations fail."""

    def __init__(
        self,
        message: str,
        *,
        token_id: TokenId | None = None,
        value: str | None = None,
    ) -> None:
        """Initialize with optional token id and value that get appended to the message."""
        extra = " "
        if token_id is not None:
            extra += f"(token id: {token_id}) "
        if value is not None:
            extra += f"(value: {value!r}) "
        super().__init__(message + extra)
        self.token_id = token_id
        self.value = value


class SequenceError(ChainBPEError):
    """Raised when the position chain is used inconsistently."""

    def __init__(
        self,
        message: str,
        *,
        position_id: PositionId | None = None,
    ) -> None:
        extra = " "
        if position_id is not None:
            extra += f"(position id: {position_id}) "
        super().__init__(message + extra)
        self.position_id = position_id


class ConfigError(ChainBPEError):
    """Raised when engine options are invalid."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available = available
