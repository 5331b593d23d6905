import logging
import sys
from typing import Callable

from tqdm.contrib.logging import logging_redirect_tqdm

import params
from pipeline import parse_input_names, run_pipeline
from tokenization import HuggingFaceTokenizerBackend, ModelLoadError

logger = logging.getLogger("tokenize_files")


def collect_parameters(read_line: Callable[[str], str] = input) -> tuple[str, list[str]]:
    """Ask for the output file name, then for the space-separated input file names."""
    output_name = read_line("Enter the output file name (e.g. output.txt): ")
    input_names = parse_input_names(read_line("Enter the input file names separated by spaces: "))
    return output_name, input_names


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    output_name, input_names = collect_parameters(input)

    try:
        with logging_redirect_tqdm():
            summary = run_pipeline(
                output_name,
                input_names,
                HuggingFaceTokenizerBackend(),
                logger,
                input_dir=params.input_dir,
                output_dir=params.output_dir,
                model_path=params.model_path,
                show_progress=True,
            )
    except ModelLoadError:
        logger.exception("Could not load tokenizer model")
        return 1

    if summary.failed:
        return 1
    logger.info(
        "%d file(s) tokenized, %d skipped, %d tokens written",
        len(summary.processed),
        len(summary.skipped),
        summary.num_tokens,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
