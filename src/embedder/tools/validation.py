"""Input checks that gate entry into the embedding pipeline.

Pure functions: each raises a distinct client error or returns None.
"""

from typing import Sequence

from embedder.configuration import MAX_SEQUENCE_LENGTH, MAX_TEXT_LENGTH, VALID_DIMENSIONS
from embedder.errors import (
    EmptyInputError,
    InvalidDimensionError,
    SequenceTooLongError,
    TextTooLongError,
)


def validate_dimension(size: int, valid: Sequence[int] = VALID_DIMENSIONS) -> None:
    """Check that *size* is one of the supported Matryoshka dimensions.

    Args:
        size: Requested output dimension.
        valid: Permitted dimensions.

    Raises:
        InvalidDimensionError: If *size* is not a member of *valid*.
    """
    # bool is an int subclass; True == 1 must not slip through
    if isinstance(size, bool) or not isinstance(size, int) or size not in valid:
        raise InvalidDimensionError(size, valid)


def validate_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> None:
    """Reject empty text and text longer than *max_length* characters.

    Raises:
        EmptyInputError: If *text* is empty.
        TextTooLongError: If *text* exceeds *max_length* characters.
    """
    if not text:
        raise EmptyInputError()
    if len(text) > max_length:
        raise TextTooLongError(got=len(text), max=max_length)


def validate_sequence_length(
    seq_len: int, max_length: int = MAX_SEQUENCE_LENGTH
) -> None:
    """Check the tokenized length against the model's context ceiling.

    Raises:
        SequenceTooLongError: If *seq_len* exceeds *max_length*.
    """
    if seq_len > max_length:
        raise SequenceTooLongError(got=seq_len, max=max_length)
