"""
Character-level text generation : corpus loading and vectorization
@date : 12/09/2022
"""

import numpy as np
import tensorflow as tf


CORPUS_URL = "https://s3.amazonaws.com/text-datasets/nietzsche.txt"
MAXLEN = 60
STEP = 3


def load_corpus(path=None):
    if path is None:
        path = tf.keras.utils.get_file("nietzsche.txt", origin=CORPUS_URL)
    with open(path, encoding="utf-8") as f:
        text = f.read().lower()
    print("Corpus length:", len(text))
    return text


"""
Semi-redundant windows of maxlen characters, one every `step` characters.
The target of each window is the character right after it.

Ex : text="abcdefg", maxlen=3, step=2
sentences = ["abc", "cde"]
next_chars = ["d", "f"]
"""
def extract_sequences(text, maxlen=MAXLEN, step=STEP):
    if len(text) <= maxlen:
        raise ValueError(f"text of {len(text)} characters is too short for maxlen={maxlen}")
    sentences = []
    next_chars = []
    for i in range(0, len(text) - maxlen, step):
        sentences.append(text[i: i + maxlen])
        next_chars.append(text[i + maxlen])
    print("Number of sequences:", len(sentences))
    return sentences, next_chars


def build_char_indices(text):
    chars = sorted(list(set(text)))
    char_indices = dict((char, chars.index(char)) for char in chars)
    return chars, char_indices


def vectorize(sentences, next_chars, chars):
    char_indices = dict((char, i) for i, char in enumerate(chars))
    maxlen = len(sentences[0])

    x = np.zeros((len(sentences), maxlen, len(chars)), dtype=bool) #(n, maxlen, n_chars)
    y = np.zeros((len(sentences), len(chars)), dtype=bool) #(n, n_chars)
    for i, sentence in enumerate(sentences):
        for t, char in enumerate(sentence):
            x[i, t, char_indices[char]] = 1
        y[i, char_indices[next_chars[i]]] = 1
    return x, y
