# -----------------------------------------------------------
# Matryoshka Embedding Service
# Hugging Face tokenizer adapter with the document prompt template.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

from pathlib import Path

import structlog
from transformers import PreTrainedTokenizerFast

from embedder.configuration import DOCUMENT_PROMPT
from embedder.errors import ResourceShapeError, TokenizationError, TokenizerLoadError

logger = structlog.get_logger()


class TokenizerAdapter:
    """Wraps a loaded tokenizer and applies the document prompt.

    Args:
        tokenizer: Loaded Hugging Face fast tokenizer.
        prompt_template: Format string with a ``{text}`` placeholder.
    """

    def __init__(
        self,
        tokenizer: PreTrainedTokenizerFast,
        prompt_template: str = DOCUMENT_PROMPT,
    ) -> None:
        """Initialize with an already loaded tokenizer."""
        self._tokenizer = tokenizer
        self._prompt_template = prompt_template

    @classmethod
    def from_file(
        cls, tokenizer_path: str, prompt_template: str = DOCUMENT_PROMPT
    ) -> "TokenizerAdapter":
        """Load a tokenizer.json definition from disk.

        Args:
            tokenizer_path: Path to the tokenizer JSON file.
            prompt_template: Format string with a ``{text}`` placeholder.

        Returns:
            TokenizerAdapter: Adapter around the loaded tokenizer.

        Raises:
            TokenizerLoadError: If the file is missing or cannot be parsed.
        """
        if not Path(tokenizer_path).is_file():
            raise TokenizerLoadError(tokenizer_path, "file not found")
        try:
            tokenizer = PreTrainedTokenizerFast(tokenizer_file=tokenizer_path)
        except Exception as exc:
            raise TokenizerLoadError(tokenizer_path, str(exc)) from exc

        logger.info("tokenizer_loaded", path=tokenizer_path, vocab_size=len(tokenizer))
        return cls(tokenizer, prompt_template=prompt_template)

    def format_prompt(self, text: str) -> str:
        return self._prompt_template.format(text=text)

    def tokenize(self, text: str) -> tuple[list[int], list[int]]:
        """Tokenize *text* with the prompt template and special tokens.

        Args:
            text: Raw input text.

        Returns:
            tuple[list[int], list[int]]: Token ids and attention mask of equal length.

        Raises:
            TokenizationError: If the tokenizer rejects the formatted text.
            ResourceShapeError: If ids and mask come back with different lengths.
        """
        formatted = self.format_prompt(text)
        try:
            encoding = self._tokenizer(formatted, add_special_tokens=True)
        except Exception as exc:
            raise TokenizationError(str(exc)) from exc

        input_ids = [int(token_id) for token_id in encoding["input_ids"]]
        attention_mask = [int(m) for m in encoding["attention_mask"]]
        if len(input_ids) != len(attention_mask):
            raise ResourceShapeError(
                f"tokenizer returned {len(input_ids)} ids but {len(attention_mask)} mask values"
            )
        return input_ids, attention_mask
