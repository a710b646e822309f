"""
Sequence classifiers on IMDB : SimpleRNN, LSTM, bidirectional LSTM, 1D convnet
@date : 27/09/2022
"""

import tensorflow as tf
from tensorflow.keras import layers


MAX_FEATURES = 10000
MAXLEN = 500


def load_imdb_sequences(max_features=MAX_FEATURES, maxlen=MAXLEN):
    print("Loading data...")
    (x_train, y_train), (x_test, y_test) = tf.keras.datasets.imdb.load_data(num_words=max_features)
    print(len(x_train), "train sequences")
    print(len(x_test), "test sequences")
    x_train = tf.keras.utils.pad_sequences(x_train, maxlen=maxlen)
    x_test = tf.keras.utils.pad_sequences(x_test, maxlen=maxlen)
    print("x_train shape:", x_train.shape)
    print("x_test shape:", x_test.shape)
    return (x_train, y_train), (x_test, y_test)


def reverse_sequences(x):
    return x[:, ::-1]


def _compile(model, optimizer="rmsprop"):
    model.compile(optimizer=optimizer,
                  loss="binary_crossentropy",
                  metrics=["acc"])
    return model


def build_simple_rnn_model(max_features=MAX_FEATURES, embedding_dim=32, units=32):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(None,)))
    model.add(layers.Embedding(max_features, embedding_dim))
    model.add(layers.SimpleRNN(units))
    model.add(layers.Dense(1, activation="sigmoid"))
    return _compile(model)


def build_lstm_model(max_features=MAX_FEATURES, embedding_dim=32, units=32):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(None,)))
    model.add(layers.Embedding(max_features, embedding_dim))
    model.add(layers.LSTM(units))
    model.add(layers.Dense(1, activation="sigmoid"))
    return _compile(model)


def build_bidirectional_lstm_model(max_features=MAX_FEATURES, embedding_dim=32, units=32):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(None,)))
    model.add(layers.Embedding(max_features, embedding_dim))
    model.add(layers.Bidirectional(layers.LSTM(units)))
    model.add(layers.Dense(1, activation="sigmoid"))
    return _compile(model)


"""
1D CONVNET
Conv1D extracts local patterns (n-grams) of `kernel_size` tokens,
MaxPooling1D subsamples the sequence, GlobalMaxPooling1D ends the feature extraction.
The input must survive (conv 7) -> (pool 5) -> (conv 7) : at least 41 tokens
"""
def build_conv1d_model(max_features=MAX_FEATURES, maxlen=MAXLEN, embedding_dim=128, filters=32, learning_rate=1e-4):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(maxlen,)))
    model.add(layers.Embedding(max_features, embedding_dim))
    model.add(layers.Conv1D(filters, 7, activation="relu"))
    model.add(layers.MaxPooling1D(5))
    model.add(layers.Conv1D(filters, 7, activation="relu"))
    model.add(layers.GlobalMaxPooling1D())
    model.add(layers.Dense(1, activation="sigmoid"))
    return _compile(model, optimizer=tf.keras.optimizers.RMSprop(learning_rate=learning_rate))
