"""
Temperature forecasting models : dense baseline, GRU variants, conv + GRU
@date : 29/09/2022
"""

import tensorflow as tf
from tensorflow.keras import layers


def _compile(model):
    model.compile(optimizer=tf.keras.optimizers.RMSprop(), loss="mae")
    return model


def build_dense_model(timesteps, n_features):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(timesteps, n_features)))
    model.add(layers.Flatten())
    model.add(layers.Dense(32, activation="relu"))
    model.add(layers.Dense(1))
    return _compile(model)


def build_gru_model(n_features, units=32, dropout=0.0, recurrent_dropout=0.0, stacked=False):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(None, n_features)))
    model.add(layers.GRU(units,
        dropout=dropout,
        recurrent_dropout=recurrent_dropout,
        return_sequences=stacked))
    if stacked:
        model.add(layers.GRU(units * 2,
            activation="relu",
            dropout=dropout,
            recurrent_dropout=recurrent_dropout))
    model.add(layers.Dense(1))
    return _compile(model)


def build_bidirectional_gru_model(n_features, units=32):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(None, n_features)))
    model.add(layers.Bidirectional(layers.GRU(units)))
    model.add(layers.Dense(1))
    return _compile(model)


"""
Conv1D as a cheap preprocessing before the GRU :
long sequences are shortened into sequences of higher-level features.
"""
def build_conv1d_gru_model(n_features, filters=32, units=32):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(None, n_features)))
    model.add(layers.Conv1D(filters, 5, activation="relu"))
    model.add(layers.MaxPooling1D(3))
    model.add(layers.Conv1D(filters, 5, activation="relu"))
    model.add(layers.GRU(units, dropout=0.1, recurrent_dropout=0.5))
    model.add(layers.Dense(1))
    return _compile(model)
