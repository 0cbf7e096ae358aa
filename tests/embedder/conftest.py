"""Shared fakes for the embedding pipeline tests.

The fakes stand in for the tokenizer and the ONNX session so the pipeline
can be exercised without model files.
"""

import threading
import time
from types import SimpleNamespace

import numpy as np
import pytest

from embedder.pipeline import Embedder

HIDDEN_DIM = 768


class FakeTokenizer:
    """Whitespace tokenizer with BOS/EOS ids and the document prompt."""

    def __init__(self, fixed_length=None, mask_value=1, error=None):
        self.fixed_length = fixed_length
        self.mask_value = mask_value
        self.error = error
        self.calls = []

    def tokenize(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        if self.fixed_length is not None:
            ids = [7] * self.fixed_length
        else:
            formatted = f"title: none | text: {text}"
            words = [sum(ord(c) for c in w) % 997 + 3 for w in formatted.split()]
            ids = [2] + words + [1]
        return ids, [self.mask_value] * len(ids)


class FakeSession:
    """Deterministic hidden states derived from token ids.

    Tracks how many ``run`` calls are in flight at once.
    """

    def __init__(self, hidden_dim=HIDDEN_DIM, delay=0.0, error=None, fill=None):
        self.hidden_dim = hidden_dim
        self.fill = fill
        self.delay = delay
        self.error = error
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self._counter_lock = threading.Lock()

    def run(self, inputs):
        with self._counter_lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.calls += 1
        try:
            if self.error is not None:
                raise self.error
            if self.delay:
                time.sleep(self.delay)
            ids = inputs["input_ids"][0].astype(np.float32)
            dims = np.arange(self.hidden_dim, dtype=np.float32)
            hidden = np.sin(ids[:, None] * 0.37 + dims[None, :] * 0.011)
            if self.fill is not None:
                hidden[0, 0] = self.fill
            return hidden[None, :, :].astype(np.float32)
        finally:
            with self._counter_lock:
                self.active -= 1


@pytest.fixture
def fake_tokenizer():
    return FakeTokenizer()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def embedder(fake_tokenizer, fake_session):
    return Embedder(fake_tokenizer, fake_session)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fakes():
    """Access to the fake classes for tests that need custom instances."""
    return SimpleNamespace(Tokenizer=FakeTokenizer, Session=FakeSession)
