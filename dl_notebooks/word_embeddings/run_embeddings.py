"""
Word embeddings : learned Embedding layer vs pretrained GloVe
@date : 22/09/2022
"""

import os

import tensorflow as tf

from dl_notebooks.shared.utils import print_section, plot_history, LogTrainingCallback
from dl_notebooks.word_embeddings.one_hot_encoding import word_level_one_hot, character_level_one_hot, \
    vectorizer_one_hot, hashed_word_one_hot
from dl_notebooks.word_embeddings.imdb_raw import load_raw_imdb, tokenize_texts, split_train_validation
from dl_notebooks.word_embeddings.glove import load_glove_index, build_embedding_matrix
from dl_notebooks.word_embeddings.embedding_models import build_imdb_embedding_model, \
    build_embedding_classifier, load_pretrained_embeddings


# http://mng.bz/0tIo -> aclImdb, https://nlp.stanford.edu/projects/glove -> glove.6B
IMDB_DIR = "aclImdb"
GLOVE_DIR = "glove.6B"

MAX_FEATURES = 10000
MAXLEN_INT = 20
MAXLEN = 100
TRAINING_SAMPLES = 200
VALIDATION_SAMPLES = 10000
MAX_WORDS = 10000
EMBEDDING_DIM = 100
EPOCHS = 10
BATCH_SIZE = 32
WEIGHTS_PATH = "pre_trained_glove_model.weights.h5"


def demo_one_hot():
    samples = ["The cat sat on the mat.", "The dog ate my homework."]

    results, token_index = word_level_one_hot(samples)
    print("word level :", results.shape, token_index)
    results, _ = character_level_one_hot(samples)
    print("character level :", results.shape)
    one_hot_results, sequences, vocabulary = vectorizer_one_hot(samples)
    print("TextVectorization :", one_hot_results.shape, sequences.tolist())
    results = hashed_word_one_hot(samples)
    print("hashing trick :", results.shape)


def run_imdb_embedding_baseline():
    (x_train, y_train), (x_test, y_test) = tf.keras.datasets.imdb.load_data(num_words=MAX_FEATURES)
    x_train = tf.keras.utils.pad_sequences(x_train, maxlen=MAXLEN_INT)
    x_test = tf.keras.utils.pad_sequences(x_test, maxlen=MAXLEN_INT)

    model = build_imdb_embedding_model(MAX_FEATURES, MAXLEN_INT)
    model.summary()
    history = model.fit(x_train, y_train, epochs=EPOCHS, batch_size=BATCH_SIZE, validation_split=0.2)
    return history


def run_glove_classifier():
    texts, labels = load_raw_imdb(IMDB_DIR, "train")
    data, vocabulary, vectorizer = tokenize_texts(texts, maxlen=MAXLEN, max_words=MAX_WORDS)
    (x_train, y_train), (x_val, y_val) = split_train_validation(
        data, labels, TRAINING_SAMPLES, VALIDATION_SAMPLES)

    embeddings_index = load_glove_index(os.path.join(GLOVE_DIR, f"glove.6B.{EMBEDDING_DIM}d.txt"))
    embedding_matrix = build_embedding_matrix(vocabulary, embeddings_index, MAX_WORDS, EMBEDDING_DIM)

    model = build_embedding_classifier(MAX_WORDS, EMBEDDING_DIM, MAXLEN)
    model = load_pretrained_embeddings(model, embedding_matrix)
    model.summary()

    history = model.fit(x_train, y_train,
        epochs=EPOCHS,
        batch_size=BATCH_SIZE,
        validation_data=(x_val, y_val),
        callbacks=[LogTrainingCallback(header="GloVe embeddings, IMDB raw")])
    model.save_weights(WEIGHTS_PATH)
    plot_history(history, "acc")
    plot_history(history, "loss")

    texts_test, y_test = load_raw_imdb(IMDB_DIR, "test")
    x_test, _, _ = tokenize_texts(texts_test, vectorizer=vectorizer)
    test_loss, test_acc = model.evaluate(x_test, y_test)
    print(f"Test loss : {test_loss:.4f} | Test accuracy : {test_acc:.4f}")
    return history


def main():
    print_section("one-hot encoding")
    demo_one_hot()
    print_section("Embedding layer on IMDB")
    run_imdb_embedding_baseline()
    print_section("pretrained GloVe embeddings")
    run_glove_classifier()


if __name__ == "__main__":
    main()
