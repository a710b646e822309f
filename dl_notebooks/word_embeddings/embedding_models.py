"""
Models with an Embedding layer
@date : 22/09/2022
"""

import tensorflow as tf
from tensorflow.keras import layers


def compile_classifier(model):
    model.compile(optimizer="rmsprop",
                  loss="binary_crossentropy",
                  metrics=["acc"])
    return model


def build_imdb_embedding_model(max_features=10000, maxlen=20, embedding_dim=8):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(maxlen,)))
    # (samples, maxlen) -> (samples, maxlen, embedding_dim)
    model.add(layers.Embedding(max_features, embedding_dim))
    # (samples, maxlen * embedding_dim)
    model.add(layers.Flatten())
    model.add(layers.Dense(1, activation="sigmoid"))
    return compile_classifier(model)


def build_embedding_classifier(max_words, embedding_dim, maxlen):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(maxlen,)))
    model.add(layers.Embedding(max_words, embedding_dim))
    model.add(layers.Flatten())
    model.add(layers.Dense(32, activation="relu"))
    model.add(layers.Dense(1, activation="sigmoid"))
    return compile_classifier(model)


def load_pretrained_embeddings(model, embedding_matrix):
    embedding_layer = model.layers[0]
    assert isinstance(embedding_layer, layers.Embedding)
    embedding_layer.set_weights([embedding_matrix])
    # frozen : the pretrained vectors must not be destroyed by the first updates
    embedding_layer.trainable = False
    # trainable changes only apply after compile
    return compile_classifier(model)
