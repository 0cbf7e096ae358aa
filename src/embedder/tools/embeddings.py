# -----------------------------------------------------------
# Matryoshka Embedding Service
# Pooling and post-processing of transformer hidden states.
# Pure functions with dependency injection; no global config or singletons.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Pooling and post-processing of transformer hidden states.

Turns the model's last_hidden_state into a document embedding: masked mean
pooling, Matryoshka truncation, and L2 normalization.
"""

from typing import Sequence

import numpy as np
import torch

from embedder.errors import ResourceShapeError


def mean_pooling(
    hidden_states: np.ndarray | torch.Tensor,
    attention_mask: Sequence[int],
) -> torch.Tensor:
    """Average token embeddings over the non-padding positions.

    Args:
        hidden_states: last_hidden_state of shape (1, seq_len, hidden_dim).
        attention_mask: Mask of length seq_len (1 = real token, 0 = padding).

    Returns:
        torch.Tensor: Pooled vector of length hidden_dim. When the mask has
            no real tokens the masked sum is returned undivided.

    Raises:
        ResourceShapeError: If the tensor is not 3-D with batch size 1, or
            the mask length does not match the sequence length.
    """
    states = torch.as_tensor(hidden_states, dtype=torch.float32)
    if states.dim() != 3 or states.shape[0] != 1:
        raise ResourceShapeError(
            f"expected hidden states of shape (1, seq_len, hidden_dim), got {tuple(states.shape)}"
        )

    # Remove batch dimension: [seq_len, hidden_dim]
    states_2d = states[0]
    mask = torch.as_tensor(list(attention_mask), dtype=torch.float32)
    if mask.shape[0] != states_2d.shape[0]:
        raise ResourceShapeError(
            f"attention_mask length {mask.shape[0]} != sequence length {states_2d.shape[0]}"
        )

    count = mask.sum()
    # [seq_len, 1] broadcast zeroes out padding rows
    summed = torch.sum(states_2d * mask.unsqueeze(-1), dim=0)

    if count > 0:
        return summed / count
    return summed


def truncate_and_normalize(pooled: torch.Tensor, size: int) -> list[float]:
    """Keep the first *size* dimensions and rescale them to unit length.

    Args:
        pooled: Pooled embedding of length hidden_dim.
        size: Target Matryoshka dimension.

    Returns:
        list[float]: L2-normalized prefix of *pooled*. An all-zero prefix is
            returned unchanged.

    Raises:
        ResourceShapeError: If *size* exceeds the pooled vector length.
    """
    if size > pooled.shape[-1]:
        raise ResourceShapeError(
            f"cannot truncate {pooled.shape[-1]}-dim embedding to {size}"
        )

    truncated = pooled[:size]
    norm = torch.linalg.vector_norm(truncated)
    if norm > 0:
        truncated = truncated / norm
    return truncated.tolist()
