# -----------------------------------------------------------
# Matryoshka Embedding Service
# Closed error taxonomy for the embedding pipeline.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Closed error taxonomy for the embedding pipeline.

Every failure crossing the pipeline boundary is an :class:`EmbedError`
subclass tagged with an :class:`ErrorKind`. Client/server classification is
an explicit table keyed by kind, so the HTTP status of any error is
deterministic.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

GENERIC_SERVER_MESSAGE = "An internal error occurred while processing your request"


class ErrorKind(str, Enum):
    """Machine-checkable error kinds."""

    INVALID_DIMENSION = "invalid_dimension"
    SEQUENCE_TOO_LONG = "sequence_too_long"
    EMPTY_INPUT = "empty_input"
    TEXT_TOO_LONG = "text_too_long"
    TOKENIZER_LOAD = "tokenizer_load"
    MODEL_LOAD = "model_load"
    TOKENIZATION = "tokenization"
    INFERENCE = "inference"
    RESOURCE_SHAPE = "resource_shape"
    POISONED_RESOURCE = "poisoned_resource"
    INTERNAL = "internal"


CLIENT_ERROR_KINDS: frozenset[ErrorKind] = frozenset(
    {
        ErrorKind.INVALID_DIMENSION,
        ErrorKind.SEQUENCE_TOO_LONG,
        ErrorKind.EMPTY_INPUT,
        ErrorKind.TEXT_TOO_LONG,
    }
)


def is_client_kind(kind: ErrorKind) -> bool:
    """Return True if errors of *kind* are caused by the caller's input."""
    return kind in CLIENT_ERROR_KINDS


class EmbedError(Exception):
    """Base class for all embedding pipeline errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    @property
    def is_client_error(self) -> bool:
        return is_client_kind(self.kind)

    @property
    def status_code(self) -> int:
        return 400 if self.is_client_error else 500

    def client_detail(self) -> str:
        """Message shown to callers for client errors."""
        return str(self)

    def user_message(self, debug: bool = False) -> str:
        """Return the message safe to send back to the caller.

        Args:
            debug: Development mode; server errors keep their full detail.

        Returns:
            str: Full detail for client errors, or for server errors in
                development; a generic message otherwise.
        """
        if self.is_client_error:
            return self.client_detail()
        if debug:
            return str(self)
        return GENERIC_SERVER_MESSAGE


class InvalidDimensionError(EmbedError):
    kind = ErrorKind.INVALID_DIMENSION

    def __init__(self, size: object, valid: Sequence[int]) -> None:
        self.size = size
        self.valid = list(valid)
        super().__init__(f"Invalid embedding size: {size}. Must be one of: {self.valid}")


class SequenceTooLongError(EmbedError):
    kind = ErrorKind.SEQUENCE_TOO_LONG

    def __init__(self, got: int, max: int) -> None:
        self.got = got
        self.max = max
        super().__init__(
            f"Tokenized sequence exceeds maximum length of {max} tokens (got {got})"
        )

    def client_detail(self) -> str:
        return f"Text is too long: {self.got} tokens (max: {self.max})"


class EmptyInputError(EmbedError):
    kind = ErrorKind.EMPTY_INPUT

    def __init__(self) -> None:
        super().__init__("Text input cannot be empty")


class TextTooLongError(EmbedError):
    kind = ErrorKind.TEXT_TOO_LONG

    def __init__(self, got: int, max: int) -> None:
        self.got = got
        self.max = max
        super().__init__(
            f"Text exceeds maximum length of {max} characters (got {got})"
        )

    def client_detail(self) -> str:
        return f"Text is too long: {self.got} characters (max: {self.max})"


class TokenizerLoadError(EmbedError):
    """Tokenizer definition missing or unreadable. Fatal at startup."""

    kind = ErrorKind.TOKENIZER_LOAD

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load tokenizer from {path}: {reason}")


class ModelLoadError(EmbedError):
    """Model artifact missing or rejected by the engine. Fatal at startup."""

    kind = ErrorKind.MODEL_LOAD

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load model from {path}: {reason}")


class TokenizationError(EmbedError):
    kind = ErrorKind.TOKENIZATION

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Tokenization failed: {detail}")


class InferenceError(EmbedError):
    kind = ErrorKind.INFERENCE

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"ONNX Runtime error: {detail}")


class ResourceShapeError(EmbedError):
    kind = ErrorKind.RESOURCE_SHAPE

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Array shape error: {detail}")


class PoisonedResourceError(EmbedError):
    kind = ErrorKind.POISONED_RESOURCE

    def __init__(self) -> None:
        super().__init__("Internal error: shared resource poisoned")


class InternalError(EmbedError):
    kind = ErrorKind.INTERNAL

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Internal server error: {detail}")
