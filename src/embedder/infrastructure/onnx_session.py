# -----------------------------------------------------------
# Matryoshka Embedding Service
# ONNX Runtime session manager for the embedding model.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

from pathlib import Path

import numpy as np
import onnxruntime as ort
import structlog

from embedder.errors import InferenceError, ModelLoadError, ResourceShapeError

logger = structlog.get_logger()

_OPTIMIZATION_LEVELS = {
    "disable": "ORT_DISABLE_ALL",
    "basic": "ORT_ENABLE_BASIC",
    "extended": "ORT_ENABLE_EXTENDED",
    "all": "ORT_ENABLE_ALL",
}


class OnnxSession:
    """Owns one ONNX Runtime inference session.

    The session is not safe for concurrent ``run`` calls from this service's
    point of view; callers serialize access through a ``SessionGuard``.

    Args:
        session: Initialized ONNX Runtime session.
    """

    def __init__(self, session: ort.InferenceSession) -> None:
        """Initialize with a loaded session."""
        self._session = session
        self._output_name = session.get_outputs()[0].name

    @classmethod
    def from_file(
        cls,
        model_path: str,
        intra_op_num_threads: int = 1,
        inter_op_num_threads: int = 1,
        optimization_level: str = "basic",
    ) -> "OnnxSession":
        """Create a CPU session from an ONNX model file.

        Models exported with external data keep their weights in a companion
        ``<model>.onnx_data`` file next to the model; ONNX Runtime resolves
        it relative to *model_path*.

        Args:
            model_path: Path to the .onnx model file.
            intra_op_num_threads: Threads used inside a single operator.
            inter_op_num_threads: Threads used across operators.
            optimization_level: One of disable, basic, extended, all.

        Returns:
            OnnxSession: Wrapper around the loaded session.

        Raises:
            ModelLoadError: If the file is missing or the engine rejects it.
        """
        if not Path(model_path).is_file():
            raise ModelLoadError(model_path, "file not found")
        if optimization_level not in _OPTIMIZATION_LEVELS:
            raise ModelLoadError(
                model_path, f"unknown graph optimization level {optimization_level!r}"
            )

        options = ort.SessionOptions()
        options.intra_op_num_threads = intra_op_num_threads
        options.inter_op_num_threads = inter_op_num_threads
        options.execution_mode = ort.ExecutionMode.ORT_SEQUENTIAL
        options.graph_optimization_level = getattr(
            ort.GraphOptimizationLevel, _OPTIMIZATION_LEVELS[optimization_level]
        )

        try:
            session = ort.InferenceSession(
                model_path,
                sess_options=options,
                providers=["CPUExecutionProvider"],
            )
        except Exception as exc:
            raise ModelLoadError(model_path, str(exc)) from exc

        logger.info(
            "onnx_session_loaded",
            path=model_path,
            intra_op_num_threads=intra_op_num_threads,
            optimization_level=optimization_level,
        )
        return cls(session)

    @property
    def hidden_dim(self) -> int | None:
        """Static hidden size of the first output, or None if dynamic."""
        shape = self._session.get_outputs()[0].shape
        if len(shape) == 3 and isinstance(shape[2], int):
            return shape[2]
        return None

    def run(self, inputs: dict[str, np.ndarray]) -> np.ndarray:
        """Execute one forward pass.

        Args:
            inputs: Named int64 tensors (input_ids, attention_mask).

        Returns:
            np.ndarray: float32 last_hidden_state of shape (batch, seq_len, hidden_dim).

        Raises:
            InferenceError: If the engine fails during the forward pass.
            ResourceShapeError: If the output is not a 3-D tensor.
        """
        try:
            outputs = self._session.run([self._output_name], inputs)
        except Exception as exc:
            raise InferenceError(str(exc)) from exc

        hidden_states = np.asarray(outputs[0], dtype=np.float32)
        if hidden_states.ndim != 3:
            raise ResourceShapeError(
                f"expected 3-D last_hidden_state, got shape {hidden_states.shape}"
            )
        return hidden_states
