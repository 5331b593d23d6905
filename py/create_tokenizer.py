import sys

from tokenization import create_tokenizer

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(f"Usage: {sys.argv[0]} <output_model_file> <text_file1> [<text_file2> ...]")
        sys.exit(1)
    output_file_path = sys.argv[1]
    files = sys.argv[2:]

    create_tokenizer(output_file_path, files)
    print(f"Tokenizer model saved to {output_file_path}")
