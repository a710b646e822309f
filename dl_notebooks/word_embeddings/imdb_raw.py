"""
IMDB from the raw text files (aclImdb)
@date : 22/09/2022
"""

import os

import numpy as np
import tensorflow as tf
from sklearn.model_selection import train_test_split


def load_raw_imdb(imdb_dir, subset="train"):
    assert subset in ("train", "test")
    data_dir = os.path.join(imdb_dir, subset)

    labels = []
    texts = []
    for label_type in ["neg", "pos"]:
        dir_name = os.path.join(data_dir, label_type)
        for fname in sorted(os.listdir(dir_name)):
            if fname[-4:] == ".txt":
                with open(os.path.join(dir_name, fname), encoding="utf-8") as f:
                    texts.append(f.read())
                labels.append(0 if label_type == "neg" else 1)
    return texts, np.asarray(labels)


def tokenize_texts(texts, maxlen=100, max_words=10000, vectorizer=None):
    """Integer sequences of length maxlen, keeping the max_words most frequent words.

    Pass the vectorizer returned by a previous call to encode the test set with
    the training vocabulary.
    """
    if vectorizer is None:
        vectorizer = tf.keras.layers.TextVectorization(
            max_tokens=max_words,
            output_mode="int",
            output_sequence_length=maxlen)
        vectorizer.adapt(texts)
    data = np.array(vectorizer(texts)) #(n, maxlen)
    vocabulary = vectorizer.get_vocabulary()
    print(f"Found {len(vocabulary)} unique tokens.")
    print("Shape of data tensor:", data.shape)
    return data, vocabulary, vectorizer


def split_train_validation(data, labels, training_samples=200, validation_samples=10000, seed=None):
    x_train, x_val, y_train, y_val = train_test_split(
        data, labels,
        train_size=training_samples,
        test_size=validation_samples,
        shuffle=True,
        random_state=seed)
    return (x_train, y_train), (x_val, y_val)
