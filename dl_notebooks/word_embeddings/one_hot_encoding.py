"""
One-hot encoding of words and characters
@date : 20/09/2022
"""

import string

import numpy as np
import tensorflow as tf


"""
WORD LEVEL
Each distinct word gets an index (0 is never attributed).
A sample becomes a (max_length, max_index+1) matrix with one 1 per word.

Ex : ["The cat sat", "The dog"] -> token_index = {"The": 1, "cat": 2, "sat": 3, "dog": 4}
"""
def word_level_one_hot(samples, max_length=10):
    token_index = {}
    for sample in samples:
        for word in sample.split():
            if word not in token_index:
                token_index[word] = len(token_index) + 1

    results = np.zeros(shape=(len(samples), max_length, max(token_index.values()) + 1))
    for i, sample in enumerate(samples):
        for j, word in list(enumerate(sample.split()))[:max_length]:
            index = token_index.get(word)
            results[i, j, index] = 1.
    return results, token_index


def character_level_one_hot(samples, max_length=50, characters=string.printable):
    token_index = dict(zip(characters, range(1, len(characters) + 1)))

    results = np.zeros((len(samples), max_length, max(token_index.values()) + 1))
    for i, sample in enumerate(samples):
        for j, character in enumerate(sample[:max_length]):
            index = token_index.get(character)
            if index is not None:
                results[i, j, index] = 1.
    return results, token_index


"""
The same thing with the builtin keras layer : TextVectorization
- strips punctuation and lower-cases the text
- keeps the `num_words` most frequent words
- multi_hot : column 0 is [UNK], no padding column
- int : index 0 is the padding, index 1 is [UNK]
"""
def vectorizer_one_hot(samples, num_words=1000):
    binary_vectorizer = tf.keras.layers.TextVectorization(max_tokens=num_words, output_mode="multi_hot")
    binary_vectorizer.adapt(samples)
    one_hot_results = np.array(binary_vectorizer(samples)) #(n, vocabulary_size - 1)

    int_vectorizer = tf.keras.layers.TextVectorization(max_tokens=num_words, output_mode="int")
    int_vectorizer.adapt(samples)
    sequences = np.array(int_vectorizer(samples)) #(n, longest_sample)

    vocabulary = int_vectorizer.get_vocabulary()
    print(f"Found {len(vocabulary)} unique tokens.")
    return one_hot_results, sequences, vocabulary


"""
HASHING TRICK
No explicit index : words are hashed into a fixed number of bins.
Saves memory with large vocabularies, at the price of collisions
(two words may share the same index).
"""
def hashed_word_one_hot(samples, dimensionality=1000, max_length=10):
    hasher = tf.keras.layers.Hashing(num_bins=dimensionality)

    results = np.zeros((len(samples), max_length, dimensionality))
    for i, sample in enumerate(samples):
        words = sample.split()[:max_length]
        if not words:
            continue
        indices = np.array(hasher(tf.constant(words))).reshape(-1)
        for j, index in enumerate(indices):
            results[i, j, index] = 1.
    return results
