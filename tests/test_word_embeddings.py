import os

import numpy as np
import pytest

from dl_notebooks.word_embeddings.one_hot_encoding import word_level_one_hot, character_level_one_hot, \
    vectorizer_one_hot, hashed_word_one_hot
from dl_notebooks.word_embeddings.imdb_raw import load_raw_imdb, tokenize_texts, split_train_validation
from dl_notebooks.word_embeddings.glove import load_glove_index, build_embedding_matrix
from dl_notebooks.word_embeddings.embedding_models import build_embedding_classifier, \
    load_pretrained_embeddings, build_imdb_embedding_model


SAMPLES = ["The cat sat on the mat.", "The dog ate my homework."]


def test_word_level_one_hot():
    results, token_index = word_level_one_hot(SAMPLES, max_length=10)
    assert token_index["The"] == 1
    assert min(token_index.values()) == 1
    assert results.shape == (2, 10, max(token_index.values()) + 1)
    assert results[0, 0, token_index["The"]] == 1.
    # 6 words then padding
    assert results[0].sum() == 6
    assert results[1].sum() == 5


def test_character_level_one_hot():
    results, token_index = character_level_one_hot(SAMPLES, max_length=50)
    assert results.shape[:2] == (2, 50)
    assert results[0, 0, token_index["T"]] == 1.
    assert results[0].sum() == len(SAMPLES[0])


def test_vectorizer_one_hot():
    one_hot_results, sequences, vocabulary = vectorizer_one_hot(SAMPLES, num_words=100)
    assert one_hot_results.shape[0] == 2
    assert set(np.unique(one_hot_results)) <= {0, 1}
    assert sequences.shape == (2, 6)
    assert "the" in vocabulary


def test_vectorizer_one_hot_index_layout():
    one_hot_results, sequences, vocabulary = vectorizer_one_hot(SAMPLES, num_words=100)
    # int mode reserves padding and [UNK], multi_hot only [UNK]
    assert vocabulary[:2] == ["", "[UNK]"]
    assert len(vocabulary) == 11
    assert one_hot_results.shape == (2, len(vocabulary) - 1)
    assert sequences[1, -1] == 0
    assert sequences[0].min() >= 2


def test_hashed_word_one_hot_is_stable():
    first = hashed_word_one_hot(SAMPLES, dimensionality=1000, max_length=10)
    second = hashed_word_one_hot(SAMPLES, dimensionality=1000, max_length=10)
    assert first.shape == (2, 10, 1000)
    np.testing.assert_array_equal(first, second)
    assert (first.sum(axis=-1)[0, :6] == 1).all()


def write_raw_imdb(root):
    for subset in ("train", "test"):
        for label_type, text in (("neg", "awful boring movie"), ("pos", "great fun movie")):
            dir_name = os.path.join(root, subset, label_type)
            os.makedirs(dir_name)
            for i in range(3):
                with open(os.path.join(dir_name, f"{i}_1.txt"), "w") as f:
                    f.write(text)
            with open(os.path.join(dir_name, "notes.md"), "w") as f:
                f.write("ignored")


def test_load_and_tokenize_raw_imdb(tmp_path):
    write_raw_imdb(str(tmp_path))
    texts, labels = load_raw_imdb(str(tmp_path), "train")
    assert len(texts) == 6
    assert labels.tolist() == [0, 0, 0, 1, 1, 1]

    data, vocabulary, vectorizer = tokenize_texts(texts, maxlen=5, max_words=20)
    assert data.shape == (6, 5)
    assert "movie" in vocabulary

    test_texts, _ = load_raw_imdb(str(tmp_path), "test")
    test_data, _, _ = tokenize_texts(test_texts, vectorizer=vectorizer)
    np.testing.assert_array_equal(test_data, data)


def test_split_train_validation():
    data = np.arange(20).reshape(10, 2)
    labels = np.arange(10)
    (x_train, y_train), (x_val, y_val) = split_train_validation(data, labels, 6, 4, seed=0)
    assert x_train.shape == (6, 2) and x_val.shape == (4, 2)
    assert sorted(y_train.tolist() + y_val.tolist()) == list(range(10))


def test_glove_index_and_embedding_matrix(tmp_path):
    path = tmp_path / "glove.txt"
    path.write_text("movie 0.1 0.2 0.3\ngreat 1.0 1.0 1.0\n")
    index = load_glove_index(str(path))
    np.testing.assert_allclose(index["movie"], [0.1, 0.2, 0.3])

    vocabulary = ["", "[UNK]", "movie", "unknown", "great"]
    matrix = build_embedding_matrix(vocabulary, index, max_words=4, embedding_dim=3)
    assert matrix.shape == (4, 3)
    assert not matrix[0].any() and not matrix[1].any() and not matrix[3].any()
    np.testing.assert_allclose(matrix[2], [0.1, 0.2, 0.3], rtol=1e-6)


def test_embedding_matrix_wrong_dimension():
    index = {"movie": np.array([0.1, 0.2], dtype="float32")}
    with pytest.raises(ValueError):
        build_embedding_matrix(["", "[UNK]", "movie"], index, max_words=3, embedding_dim=3)


def test_glove_malformed_line(tmp_path):
    path = tmp_path / "glove.txt"
    path.write_text("movie\n")
    with pytest.raises(ValueError):
        load_glove_index(str(path))


def test_pretrained_embeddings_are_frozen():
    model = build_embedding_classifier(max_words=10, embedding_dim=4, maxlen=6)
    matrix = np.random.random((10, 4))
    model = load_pretrained_embeddings(model, matrix)
    embedding_layer = model.layers[0]
    assert not embedding_layer.trainable
    np.testing.assert_allclose(embedding_layer.get_weights()[0], matrix, rtol=1e-6)
    assert model.predict(np.zeros((2, 6), dtype="int32"), verbose=0).shape == (2, 1)


def test_imdb_embedding_model_output():
    model = build_imdb_embedding_model(max_features=50, maxlen=20)
    preds = model.predict(np.ones((3, 20), dtype="int32"), verbose=0)
    assert preds.shape == (3, 1)
    assert ((preds >= 0) & (preds <= 1)).all()
