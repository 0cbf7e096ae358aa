"""Tensor layout helpers for the ONNX model inputs and outputs."""

from typing import Sequence

import numpy as np

from embedder.errors import InferenceError, ResourceShapeError

INPUT_IDS = "input_ids"
ATTENTION_MASK = "attention_mask"


def build_input_tensors(
    tokens: Sequence[int], mask: Sequence[int]
) -> dict[str, np.ndarray]:
    """Wrap token ids and attention mask as a batch of one example.

    Args:
        tokens: Token ids of length n.
        mask: Attention mask of length n.

    Returns:
        dict[str, np.ndarray]: Named int64 inputs, each of shape (1, n).

    Raises:
        ResourceShapeError: If the two sequences differ in length.
    """
    if len(tokens) != len(mask):
        raise ResourceShapeError(
            f"input_ids length {len(tokens)} != attention_mask length {len(mask)}"
        )
    seq_len = len(tokens)
    return {
        INPUT_IDS: np.asarray(tokens, dtype=np.int64).reshape(1, seq_len),
        ATTENTION_MASK: np.asarray(mask, dtype=np.int64).reshape(1, seq_len),
    }


def check_hidden_state_shape(hidden: np.ndarray, seq_len: int, size: int) -> None:
    """Verify the model output is a (1, seq_len, hidden_dim) tensor with hidden_dim >= size.

    Raises:
        ResourceShapeError: On any mismatch.
    """
    if hidden.ndim != 3:
        raise ResourceShapeError(
            f"expected 3-D last_hidden_state, got shape {tuple(hidden.shape)}"
        )
    batch, out_len, hidden_dim = hidden.shape
    if batch != 1:
        raise ResourceShapeError(f"expected batch size 1, got {batch}")
    if out_len != seq_len:
        raise ResourceShapeError(
            f"output sequence length {out_len} != input length {seq_len}"
        )
    if hidden_dim < size:
        raise ResourceShapeError(
            f"hidden dimension {hidden_dim} is smaller than requested size {size}"
        )


def check_hidden_state_finite(hidden: np.ndarray) -> None:
    """Reject engine output containing NaN or infinity.

    Raises:
        InferenceError: If any element of *hidden* is not finite.
    """
    finite = np.isfinite(hidden)
    if not finite.all():
        raise InferenceError(
            f"last_hidden_state has {int(finite.size - finite.sum())} non-finite values"
        )
