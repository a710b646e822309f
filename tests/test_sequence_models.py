import numpy as np
import pytest

from dl_notebooks.sequence_models.numpy_rnn import simple_rnn_forward, random_rnn_parameters
from dl_notebooks.sequence_models.imdb_models import reverse_sequences, build_simple_rnn_model, \
    build_lstm_model, build_bidirectional_lstm_model, build_conv1d_model
from dl_notebooks.sequence_models.jena_climate import normalize, sequence_generator, evaluate_naive_method, \
    load_jena_climate, make_generators
from dl_notebooks.sequence_models.temperature_models import build_dense_model, build_gru_model, \
    build_bidirectional_gru_model, build_conv1d_gru_model


def test_simple_rnn_forward(rng):
    inputs = rng.random((10, 4))
    W, U, b = random_rnn_parameters(4, 6, rng=rng)
    outputs = simple_rnn_forward(inputs, W, U, b)
    assert outputs.shape == (10, 6)
    np.testing.assert_allclose(outputs[0], np.tanh(W.dot(inputs[0]) + b))
    np.testing.assert_allclose(outputs[1], np.tanh(W.dot(inputs[1]) + U.dot(outputs[0]) + b))


def test_simple_rnn_forward_dimension_mismatch(rng):
    W, U, b = random_rnn_parameters(4, 6, rng=rng)
    with pytest.raises(ValueError):
        simple_rnn_forward(rng.random((10, 5)), W, U, b)


def test_reverse_sequences():
    x = np.array([[1, 2, 3], [4, 5, 6]])
    assert reverse_sequences(x).tolist() == [[3, 2, 1], [6, 5, 4]]


@pytest.mark.parametrize("build", [build_simple_rnn_model, build_lstm_model, build_bidirectional_lstm_model])
def test_recurrent_classifiers_output(build):
    model = build(max_features=30, embedding_dim=4, units=4)
    preds = model.predict(np.ones((2, 12), dtype="int32"), verbose=0)
    assert preds.shape == (2, 1)


def test_conv1d_classifier_output():
    model = build_conv1d_model(max_features=30, maxlen=60, embedding_dim=4, filters=4)
    preds = model.predict(np.ones((2, 60), dtype="int32"), verbose=0)
    assert preds.shape == (2, 1)
    assert ((preds >= 0) & (preds <= 1)).all()


def test_normalize_uses_training_slice(rng):
    data = rng.random((100, 3)) * 10
    normalized, mean, std = normalize(data, train_end=50)
    np.testing.assert_allclose(normalized[:50].mean(axis=0), 0, atol=1e-7)
    np.testing.assert_allclose(normalized[:50].std(axis=0), 1, atol=1e-7)
    np.testing.assert_allclose(mean, data[:50].mean(axis=0))


def test_sequence_generator_shapes_and_targets():
    data = np.arange(200 * 2, dtype="float64").reshape(200, 2)
    gen = sequence_generator(data, lookback=12, delay=3, min_index=0, max_index=100,
        batch_size=8, step=4, target_column=1)
    samples, targets = next(gen)
    assert samples.shape == (8, 3, 2)
    assert targets.shape == (8,)
    # first row is min_index + lookback
    np.testing.assert_array_equal(samples[0, :, 1], data[[0, 4, 8], 1])
    assert targets[0] == data[12 + 3, 1]


def test_sequence_generator_lookback_not_multiple_of_step():
    data = np.arange(200 * 2, dtype="float64").reshape(200, 2)
    gen = sequence_generator(data, lookback=10, delay=2, min_index=0, max_index=100,
        batch_size=4, step=3)
    samples, targets = next(gen)
    # rows 0, 3, 6, 9 before the first target
    assert samples.shape == (4, 4, 2)
    np.testing.assert_array_equal(samples[0], data[[0, 3, 6, 9]])
    assert targets[0] == data[10 + 2, 1]


def test_sequence_generator_shuffle_stays_in_bounds(rng):
    data = np.random.random((300, 2))
    gen = sequence_generator(data, lookback=10, delay=2, min_index=50, max_index=120,
        shuffle=True, batch_size=16, step=2, rng=rng)
    samples, targets = next(gen)
    assert samples.shape == (16, 5, 2)


def test_sequence_generator_needs_room_for_lookback():
    gen = sequence_generator(np.zeros((50, 2)), lookback=40, delay=1, min_index=0, max_index=30)
    with pytest.raises(ValueError):
        next(gen)


def test_naive_method_is_exact_on_constant_series():
    data = np.ones((200, 2))
    gen = sequence_generator(data, lookback=10, delay=5, min_index=0, max_index=150, batch_size=8, step=2)
    assert evaluate_naive_method(gen, steps=3) == 0.0


def test_temperature_models_output():
    x = np.random.random((2, 20, 3)).astype("float32")
    assert build_dense_model(20, 3).predict(x, verbose=0).shape == (2, 1)
    assert build_gru_model(3, units=4).predict(x, verbose=0).shape == (2, 1)
    assert build_gru_model(3, units=4, dropout=0.1, stacked=True).predict(x, verbose=0).shape == (2, 1)
    assert build_bidirectional_gru_model(3, units=4).predict(x, verbose=0).shape == (2, 1)
    assert build_conv1d_gru_model(3, filters=4, units=4).predict(x, verbose=0).shape == (2, 1)


def test_load_jena_climate_drops_date_column(tmp_path):
    path = tmp_path / "jena.csv"
    path.write_text('"Date Time","p (mbar)","T (degC)"\n'
                    '01.01.2009 00:10:00,996.52,-8.02\n'
                    '01.01.2009 00:20:00,996.57,-8.41\n'
                    '01.01.2009 00:30:00,996.53,-8.51\n')
    float_data, header = load_jena_climate(str(path))
    assert header == ["p (mbar)", "T (degC)"]
    assert float_data.shape == (3, 2)
    assert float_data.dtype == np.float32
    np.testing.assert_allclose(float_data[:, 1], [-8.02, -8.41, -8.51], rtol=1e-6)


def test_make_generators_steps_and_batches():
    data = np.random.random((400, 3)).astype("float32")
    (train_gen, val_gen, test_gen), (val_steps, test_steps) = make_generators(data, lookback=10,
        delay=2, step=2, batch_size=8, train_end=200, val_end=300)
    assert val_steps == (300 - 201 - 10) // 8
    assert test_steps == (400 - 301 - 10) // 8
    for gen in (train_gen, val_gen, test_gen):
        samples, targets = next(gen)
        assert samples.shape == (8, 5, 3)
        assert targets.shape == (8,)
