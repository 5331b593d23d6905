input_dir = "inputs"
output_dir = "output"

model_path = "models/en-token.model"

# Word-level tokenizer training
vocab_size = 32768
min_frequency = 1
unk_token = "[UNK]"
