"""
Character-level text generation : LSTM model and sampling
@date : 12/09/2022
"""

import numpy as np
import tensorflow as tf
from tensorflow.keras import layers


def build_model(maxlen, n_chars, units=128, learning_rate=0.01):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(maxlen, n_chars)))
    model.add(layers.LSTM(units))
    model.add(layers.Dense(n_chars, activation="softmax"))

    optimizer = tf.keras.optimizers.RMSprop(learning_rate=learning_rate)
    model.compile(loss="categorical_crossentropy", optimizer=optimizer)
    return model


"""
SAMPLING WITH TEMPERATURE
The model outputs a probability distribution over the characters.
Before drawing the next character, the distribution is reweighted :
    p' = exp( log(p) / T ) / sum( exp( log(p) / T ) )

- T < 1 : sharper distribution, repetitive but plausible text
- T = 1 : original distribution
- T > 1 : flatter distribution, more surprising text (and more spelling errors)
"""
def sample(preds, temperature=1.0, rng=None):
    if temperature <= 0:
        raise ValueError(f"temperature must be > 0, got {temperature}")
    rng = rng if rng is not None else np.random.default_rng()

    preds = np.asarray(preds).astype("float64")
    preds = np.log(preds + 1e-12) / temperature
    exp_preds = np.exp(preds - np.max(preds))
    preds = exp_preds / np.sum(exp_preds)
    probas = rng.multinomial(1, preds, 1)
    return int(np.argmax(probas))


def generate_text(model, seed_text, chars, n_chars=400, temperature=1.0, rng=None):
    """Extend seed_text by n_chars characters, one prediction per character.

    The model sees a sliding window with the same length as seed_text.
    Returns only the generated characters.
    """
    assert isinstance(seed_text, str)
    char_indices = dict((char, i) for i, char in enumerate(chars))
    maxlen = len(seed_text)
    window = seed_text
    generated = []

    for _ in range(n_chars):
        sampled = np.zeros((1, maxlen, len(chars))) #(1, maxlen, n_chars)
        for t, char in enumerate(window):
            sampled[0, t, char_indices[char]] = 1.

        preds = model.predict(sampled, verbose=0)[0]
        next_char = chars[sample(preds, temperature, rng=rng)]

        generated.append(next_char)
        window = window[1:] + next_char

    return "".join(generated)
