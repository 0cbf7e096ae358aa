"""Tests for the error taxonomy and its client/server classification."""

import pytest

from embedder.errors import (
    CLIENT_ERROR_KINDS,
    GENERIC_SERVER_MESSAGE,
    EmbedError,
    EmptyInputError,
    ErrorKind,
    InferenceError,
    InternalError,
    InvalidDimensionError,
    ModelLoadError,
    PoisonedResourceError,
    ResourceShapeError,
    SequenceTooLongError,
    TextTooLongError,
    TokenizationError,
    TokenizerLoadError,
    is_client_kind,
)

CLIENT_ERRORS = [
    InvalidDimensionError(500, [768, 512, 256, 128]),
    SequenceTooLongError(got=9000, max=8192),
    EmptyInputError(),
    TextTooLongError(got=100_001, max=100_000),
]

SERVER_ERRORS = [
    TokenizerLoadError("model/tokenizer.json", "file not found"),
    ModelLoadError("model/model_quantized.onnx", "file not found"),
    TokenizationError("bad input"),
    InferenceError("engine fault"),
    ResourceShapeError("(1, 3) != (1, 4)"),
    PoisonedResourceError(),
    InternalError("unexpected"),
]


def test_every_kind_has_exactly_one_error_class():
    kinds = [type(err).kind for err in CLIENT_ERRORS + SERVER_ERRORS]
    assert sorted(kinds, key=lambda k: k.value) == sorted(ErrorKind, key=lambda k: k.value)


@pytest.mark.parametrize("err", CLIENT_ERRORS, ids=lambda e: e.kind.value)
def test_client_errors_map_to_400(err):
    assert err.is_client_error
    assert err.status_code == 400
    assert is_client_kind(err.kind)


@pytest.mark.parametrize("err", SERVER_ERRORS, ids=lambda e: e.kind.value)
def test_server_errors_map_to_500(err):
    assert not err.is_client_error
    assert err.status_code == 500
    assert err.kind not in CLIENT_ERROR_KINDS


@pytest.mark.parametrize("err", SERVER_ERRORS, ids=lambda e: e.kind.value)
def test_server_errors_hide_detail_in_production(err):
    assert err.user_message(debug=False) == GENERIC_SERVER_MESSAGE
    assert err.user_message(debug=True) == str(err)


def test_all_errors_are_embed_errors():
    for err in CLIENT_ERRORS + SERVER_ERRORS:
        assert isinstance(err, EmbedError)


def test_invalid_dimension_lists_valid_set():
    err = InvalidDimensionError(500, (768, 512, 256, 128))
    assert err.size == 500
    assert err.valid == [768, 512, 256, 128]
    assert err.user_message() == (
        "Invalid embedding size: 500. Must be one of: [768, 512, 256, 128]"
    )


def test_sequence_too_long_reports_counts():
    err = SequenceTooLongError(got=9000, max=8192)
    assert (err.got, err.max) == (9000, 8192)
    assert str(err) == "Tokenized sequence exceeds maximum length of 8192 tokens (got 9000)"
    assert err.user_message() == "Text is too long: 9000 tokens (max: 8192)"


def test_text_too_long_reports_counts():
    err = TextTooLongError(got=100_001, max=100_000)
    assert (err.got, err.max) == (100_001, 100_000)
    assert err.user_message() == "Text is too long: 100001 characters (max: 100000)"


def test_client_message_ignores_debug_flag():
    err = EmptyInputError()
    assert err.user_message(debug=False) == "Text input cannot be empty"
    assert err.user_message(debug=True) == "Text input cannot be empty"


def test_tokenizer_load_keeps_path_and_reason():
    err = TokenizerLoadError("model/tokenizer.json", "file not found")
    assert err.path == "model/tokenizer.json"
    assert err.reason == "file not found"
    assert str(err) == "Failed to load tokenizer from model/tokenizer.json: file not found"


def test_error_kind_values_are_strings():
    assert ErrorKind.SEQUENCE_TOO_LONG.value == "sequence_too_long"
    assert ErrorKind("internal") is ErrorKind.INTERNAL
