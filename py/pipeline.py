import logging
import os
from dataclasses import dataclass, field
from typing import Iterable

from tqdm import tqdm

from params import input_dir as default_input_dir
from params import model_path as default_model_path
from params import output_dir as default_output_dir
from tokenization import TokenizerBackend


@dataclass
class BatchSummary:
    output_path: str
    processed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    num_tokens: int = 0
    failed: bool = False


def parse_input_names(line: str) -> list[str]:
    """
    Split a line of input file names on single spaces.

    Trailing empty names are dropped; interior ones (from repeated spaces) are kept and
    end up reported as missing files. File names containing spaces cannot be expressed.
    """
    names = line.split(" ")
    while names and names[-1] == "":
        names.pop()
    return names


def run_pipeline(
    output_name: str,
    input_names: list[str],
    backend: TokenizerBackend,
    logger: logging.Logger,
    input_dir: str = default_input_dir,
    output_dir: str = default_output_dir,
    model_path: str = default_model_path,
    show_progress: bool = False,
) -> BatchSummary:
    """
    Tokenize each input file in order and write the tokens to a single output file.

    The model is loaded before the output file is opened, so a ModelLoadError leaves the
    file system untouched. Missing input files are logged and skipped. An I/O error on an
    existing file (or on the output) aborts the remaining files and sets `failed` on the
    returned summary. The model is released exactly once on every path after loading.

    Args:
        output_name: Output file name, relative to output_dir
        input_names: Input file names, relative to input_dir, in the order to process them
        backend: Tokenizer capability used to load, apply and release the model
        logger: Destination for progress, warning and error messages
        input_dir: Directory input names are resolved against
        output_dir: Directory the output name is resolved against
        model_path: Path of the tokenizer model file
        show_progress: Show a tqdm progress bar over the input files

    Returns:
        Summary of the processed and skipped files
    """
    output_path = os.path.join(output_dir, output_name)
    summary = BatchSummary(output_path)

    model = backend.load(model_path)
    logger.info("Loaded tokenizer model from %s", model_path)

    progress_bar: tqdm[str] | None = None
    # File being read or written when an I/O error hits
    current_path = output_path
    try:
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir)
        with open(output_path, "w", encoding="utf-8") as output_file:
            names: Iterable[str] = input_names
            if show_progress:
                progress_bar = tqdm(input_names, desc="Tokenizing files", unit="file")
                names = progress_bar

            for input_name in names:
                input_path = os.path.join(input_dir, input_name)
                if not os.path.isfile(input_path):
                    logger.warning("%s not found, skipping", input_path)
                    summary.skipped.append(input_path)
                    continue

                current_path = input_path
                with open(input_path, "r", encoding="utf-8") as input_file:
                    content = input_file.read()

                tokens = backend.tokenize(model, content)
                current_path = output_path
                for token in tokens:
                    output_file.write(token + "\n")

                summary.processed.append(input_path)
                summary.num_tokens += len(tokens)
    except (OSError, UnicodeDecodeError):
        logger.exception("Tokenization aborted at %s", current_path)
        summary.failed = True
    finally:
        if progress_bar is not None:
            progress_bar.close()
        try:
            backend.release(model)
        except Exception:
            logger.exception("Failed to release tokenizer model %s", model_path)

    if not summary.failed:
        logger.info("Tokenization complete. Results saved to %s", output_path)
    return summary
