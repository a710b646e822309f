"""
Character-level text generation : training, with text generated after each epoch
@date : 12/09/2022
"""

import random
import time

from colorama import Fore, Style

from dl_notebooks.shared.utils import print_ram_used, print_section, append_log, LOG_PATH
from dl_notebooks.text_generation.preprocess_text import load_corpus, extract_sequences, \
    build_char_indices, vectorize, MAXLEN, STEP
from dl_notebooks.text_generation.char_lstm_model import build_model, generate_text


EPOCHS = 60
BATCH_SIZE = 128
N_GENERATED_CHARS = 400
TEMPERATURES = (0.2, 0.5, 1.0, 1.2)
WEIGHTS_PATH = "char_lstm_epoch_{epoch:02d}.weights.h5"


def train_and_generate(model, text, x, y, chars, epochs=EPOCHS, batch_size=BATCH_SIZE,
                       temperatures=TEMPERATURES, n_chars=N_GENERATED_CHARS, maxlen=MAXLEN,
                       weights_path=WEIGHTS_PATH, log_path=LOG_PATH):
    samples = {}
    for epoch in range(1, epochs + 1):
        start = time.time()
        print_section(f"epoch {epoch}")
        history = model.fit(x, y, batch_size=batch_size, epochs=1)
        loss = history.history["loss"][-1]
        append_log(log_path, f"Time : {int((time.time() - start)/60)}min - [Epoch]: {epoch} - [LOSS] : {loss:.4f}")
        if weights_path is not None:
            model.save_weights(weights_path.format(epoch=epoch))

        start_index = random.randint(0, len(text) - maxlen - 1)
        seed_text = text[start_index: start_index + maxlen]
        print(Fore.GREEN + f'--- Generating with seed: "{seed_text}"' + Style.RESET_ALL)

        samples[epoch] = {}
        for temperature in temperatures:
            generated = generate_text(model, seed_text, chars, n_chars=n_chars, temperature=temperature)
            samples[epoch][temperature] = generated
            print(Fore.YELLOW + f"------ temperature: {temperature}" + Style.RESET_ALL)
            print(seed_text + generated)
    return samples


def main():
    text = load_corpus()
    sentences, next_chars = extract_sequences(text, maxlen=MAXLEN, step=STEP)
    chars, _ = build_char_indices(text)
    print("Unique characters:", len(chars))

    x, y = vectorize(sentences, next_chars, chars)
    print_ram_used()

    model = build_model(MAXLEN, len(chars))
    model.summary()

    train_and_generate(model, text, x, y, chars)


if __name__ == "__main__":
    main()
