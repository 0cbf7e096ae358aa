# -----------------------------------------------------------
# Matryoshka Embedding Service
# Tests for the TokenizerAdapter.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Tests for the TokenizerAdapter."""

from unittest.mock import MagicMock, patch

import pytest

from embedder.errors import ResourceShapeError, TokenizationError, TokenizerLoadError
from embedder.infrastructure.tokenizer_client import TokenizerAdapter


def _make_tokenizer(input_ids=None, attention_mask=None):
    mock_tokenizer = MagicMock()
    ids = input_ids if input_ids is not None else [2, 101, 102, 103, 1]
    mask = attention_mask if attention_mask is not None else [1] * len(ids)
    mock_tokenizer.return_value = {"input_ids": ids, "attention_mask": mask}
    return mock_tokenizer


def test_tokenize_applies_document_prompt():
    mock_tokenizer = _make_tokenizer()
    adapter = TokenizerAdapter(mock_tokenizer)

    adapter.tokenize("hello world")

    mock_tokenizer.assert_called_once_with(
        "title: none | text: hello world", add_special_tokens=True
    )


def test_tokenize_custom_prompt_template():
    mock_tokenizer = _make_tokenizer()
    adapter = TokenizerAdapter(mock_tokenizer, prompt_template="task: search result | query: {text}")

    adapter.tokenize("hello")

    assert mock_tokenizer.call_args[0][0] == "task: search result | query: hello"


def test_tokenize_returns_equal_length_int_lists():
    adapter = TokenizerAdapter(_make_tokenizer())

    ids, mask = adapter.tokenize("hello world")

    assert ids == [2, 101, 102, 103, 1]
    assert mask == [1, 1, 1, 1, 1]
    assert len(ids) == len(mask)
    assert all(isinstance(v, int) for v in ids + mask)


def test_tokenize_wraps_tokenizer_failure():
    mock_tokenizer = MagicMock(side_effect=ValueError("cannot encode"))
    adapter = TokenizerAdapter(mock_tokenizer)

    with pytest.raises(TokenizationError) as exc_info:
        adapter.tokenize("hello")

    assert "cannot encode" in str(exc_info.value)
    assert not exc_info.value.is_client_error


def test_tokenize_rejects_mismatched_mask():
    adapter = TokenizerAdapter(_make_tokenizer([2, 5, 1], [1, 1]))

    with pytest.raises(ResourceShapeError):
        adapter.tokenize("hello")


def test_from_file_missing_path(tmp_path):
    missing = tmp_path / "tokenizer.json"

    with pytest.raises(TokenizerLoadError) as exc_info:
        TokenizerAdapter.from_file(str(missing))

    assert exc_info.value.path == str(missing)
    assert exc_info.value.reason == "file not found"


@patch("embedder.infrastructure.tokenizer_client.PreTrainedTokenizerFast")
def test_from_file_loads_tokenizer_json(mock_fast, tmp_path):
    path = tmp_path / "tokenizer.json"
    path.write_text("{}")
    mock_fast.return_value = _make_tokenizer()

    adapter = TokenizerAdapter.from_file(str(path))

    mock_fast.assert_called_once_with(tokenizer_file=str(path))
    assert adapter.tokenize("hi")[0] == [2, 101, 102, 103, 1]


@patch("embedder.infrastructure.tokenizer_client.PreTrainedTokenizerFast")
def test_from_file_corrupt_definition(mock_fast, tmp_path):
    path = tmp_path / "tokenizer.json"
    path.write_text("not json")
    mock_fast.side_effect = Exception("expected value at line 1 column 1")

    with pytest.raises(TokenizerLoadError) as exc_info:
        TokenizerAdapter.from_file(str(path))

    assert "expected value" in exc_info.value.reason
