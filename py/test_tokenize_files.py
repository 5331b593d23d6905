import logging
import os
from typing import Callable

import pytest
import tokenizers  # type: ignore

import tokenize_files
from tokenize_files import collect_parameters, main


def scripted_input(lines: list[str]) -> tuple[Callable[[str], str], list[str]]:
    prompts: list[str] = []
    remaining = list(lines)

    def read_line(prompt: str = "") -> str:
        prompts.append(prompt)
        return remaining.pop(0)

    return read_line, prompts


def make_workspace(base: str, inputs: dict[str, str]) -> None:
    os.makedirs(os.path.join(base, "inputs"))
    os.makedirs(os.path.join(base, "models"))
    for name, content in inputs.items():
        with open(os.path.join(base, "inputs", name), "w", encoding="utf-8") as f:
            f.write(content)
    tok = tokenizers.Tokenizer(tokenizers.models.WordLevel(vocab={"[UNK]": 0}, unk_token="[UNK]"))
    tok.pre_tokenizer = tokenizers.pre_tokenizers.Whitespace()
    tok.save(os.path.join(base, "models", "en-token.model"))


def test_collect_parameters_prompts_in_order() -> None:
    read_line, prompts = scripted_input(["tokens.txt", "a.txt b.txt"])

    output_name, input_names = collect_parameters(read_line)

    assert output_name == "tokens.txt"
    assert input_names == ["a.txt", "b.txt"]
    assert len(prompts) == 2
    assert "output file" in prompts[0]
    assert "input file" in prompts[1]


def test_main_end_to_end(
    tmp_path: str, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    make_workspace(str(tmp_path), {"a.txt": "Hello world.", "c.txt": "Bye now"})
    monkeypatch.chdir(tmp_path)
    read_line, _ = scripted_input(["out.txt", "a.txt b.txt c.txt"])
    monkeypatch.setattr("builtins.input", read_line)
    caplog.set_level(logging.INFO)

    assert main() == 0

    with open(os.path.join(tmp_path, "output", "out.txt"), "r", encoding="utf-8") as f:
        assert f.read() == "Hello\nworld\n.\nBye\nnow\n"
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == [f"{os.path.join('inputs', 'b.txt')} not found, skipping"]


def test_main_missing_model(
    tmp_path: str, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    os.makedirs(os.path.join(tmp_path, "inputs"))
    monkeypatch.chdir(tmp_path)
    read_line, _ = scripted_input(["out.txt", "a.txt"])
    monkeypatch.setattr("builtins.input", read_line)
    caplog.set_level(logging.INFO)

    assert main() == 1

    assert not os.path.exists(os.path.join(tmp_path, "output"))
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].name == tokenize_files.logger.name


def test_main_io_failure_returns_error(
    tmp_path: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    make_workspace(str(tmp_path), {})
    with open(os.path.join(tmp_path, "inputs", "bad.txt"), "wb") as f:
        f.write(b"\xff\xfe not utf-8")
    monkeypatch.chdir(tmp_path)
    read_line, _ = scripted_input(["out.txt", "bad.txt"])
    monkeypatch.setattr("builtins.input", read_line)

    assert main() == 1
