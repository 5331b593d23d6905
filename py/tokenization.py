from typing import Any, Protocol

import tokenizers  # type: ignore
from tabulate import tabulate

from params import min_frequency, unk_token, vocab_size


class ModelLoadError(Exception):
    """Raised when a tokenizer model file is missing, unreadable or malformed."""


class TokenizerBackend(Protocol):
    def load(self, model_path: str) -> Any: ...
    def tokenize(self, model: Any, text: str) -> list[str]: ...
    def release(self, model: Any) -> None: ...


class _LoadedModel:
    def __init__(self, tokenizer: tokenizers.Tokenizer, model_path: str) -> None:
        self.tokenizer: tokenizers.Tokenizer | None = tokenizer
        self.model_path = model_path


class HuggingFaceTokenizerBackend:
    """Tokenizer capability backed by a `tokenizers` JSON model file."""

    def load(self, model_path: str) -> _LoadedModel:
        try:
            with open(model_path, "r", encoding="utf-8") as model_file:
                serialized = model_file.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ModelLoadError(f"Could not read tokenizer model {model_path}: {e}") from e

        try:
            tokenizer = tokenizers.Tokenizer.from_str(serialized)
        except Exception as e:
            # tokenizers reports parse failures as a plain Exception
            raise ModelLoadError(f"Malformed tokenizer model {model_path}: {e}") from e

        return _LoadedModel(tokenizer, model_path)

    def tokenize(self, model: _LoadedModel, text: str) -> list[str]:
        if model.tokenizer is None:
            raise ValueError(f"Tokenizer model {model.model_path} has been released")
        return [token for token, _, _ in token_spans(model.tokenizer, text)]

    def release(self, model: _LoadedModel) -> None:
        if model.tokenizer is None:
            raise ValueError(f"Tokenizer model {model.model_path} released twice")
        model.tokenizer = None


def token_spans(tokenizer: tokenizers.Tokenizer, text: str) -> list[tuple[str, int, int]]:
    """
    Tokenize text and return the surface form of each token with its span.

    Args:
        tokenizer: The tokenizer to use for encoding
        text: Text to tokenize

    Returns:
        List of (token, start, end) tuples, where start/end are character offsets into text.
        Special tokens (empty span) and whitespace-only tokens are dropped. Overlapping
        offsets, as produced by byte-level models splitting one character into several
        tokens, are merged so each part of the text appears once.
    """
    encoding = tokenizer.encode(text, add_special_tokens=False)
    merged: list[list[int]] = []
    for start, end in encoding.offsets:
        if start == end:
            continue
        if merged and start < merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
            continue
        merged.append([start, end])

    spans = []
    for start, end in merged:
        surface = text[start:end]
        stripped = surface.strip()
        if not stripped:
            continue
        # Narrow the span to the stripped token
        start += len(surface) - len(surface.lstrip())
        spans.append((stripped, start, start + len(stripped)))
    return spans


def create_tokenizer(output_file_path: str, files: list[str]) -> None:
    tokenizer = tokenizers.Tokenizer(tokenizers.models.WordLevel(unk_token=unk_token))
    trainer = tokenizers.trainers.WordLevelTrainer(
        special_tokens=[unk_token],
        vocab_size=vocab_size,
        min_frequency=min_frequency,
        show_progress=True,
    )
    tokenizer.pre_tokenizer = tokenizers.pre_tokenizers.Whitespace()
    tokenizer.train(files, trainer)
    tokenizer.save(output_file_path)


def pretty_print_tokens(spans: list[tuple[str, int, int]], chunk_size: int = 20) -> None:
    """Print tokens with their character spans in a readable format."""
    rows = [spans[i : i + chunk_size] for i in range(0, len(spans), chunk_size)]
    for spans_chunk in rows:
        print(
            tabulate(
                [
                    [token for token, _, _ in spans_chunk],
                    [f"{start}:{end}" for _, start, end in spans_chunk],
                ]
            )
        )
