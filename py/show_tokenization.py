import sys

from params import model_path
from tokenization import HuggingFaceTokenizerBackend, ModelLoadError, pretty_print_tokens
from tokenization import token_spans

if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print(f'Usage: python {sys.argv[0]} "<text>" [<model_file>]')
        sys.exit(1)

    text = sys.argv[1]
    path = sys.argv[2] if len(sys.argv) == 3 else model_path

    backend = HuggingFaceTokenizerBackend()
    try:
        model = backend.load(path)
    except ModelLoadError as e:
        print(f"✗ ERROR: {e}")
        sys.exit(1)

    pretty_print_tokens(token_spans(model.tokenizer, text))
    print()
    backend.release(model)
