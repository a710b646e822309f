import os

import cv2
import numpy as np
import pytest
import tensorflow as tf
from tensorflow.keras import layers

from dl_notebooks.style_transfer.losses import content_loss, gram_matrix, style_loss, \
    total_variation_loss, compute_loss
from dl_notebooks.style_transfer.neural_style_transfer import target_dimensions, deprocess_image, \
    build_feature_extractor, Evaluator, VGG19_MEAN_BGR, preprocess_image, run_style_transfer


def test_content_loss():
    base = tf.zeros((2, 2, 3))
    combination = tf.ones((2, 2, 3))
    assert float(content_loss(base, combination)) == 12.0


def test_gram_matrix_matches_numpy():
    x = np.random.random((4, 5, 3)).astype("float32")
    features = x.reshape(-1, 3).T #(C, H*W)
    expected = features.dot(features.T)
    np.testing.assert_allclose(gram_matrix(tf.constant(x)).numpy(), expected, rtol=1e-5)


def test_style_loss_zero_for_same_features():
    x = tf.random.uniform((4, 4, 8))
    assert float(style_loss(x, x, 4, 4)) == 0.0
    y = tf.random.uniform((4, 4, 8))
    assert float(style_loss(x, y, 4, 4)) > 0.0


def test_total_variation_loss():
    constant = tf.ones((1, 5, 6, 3))
    assert float(total_variation_loss(constant, 5, 6)) == 0.0
    noisy = tf.random.uniform((1, 5, 6, 3))
    assert float(total_variation_loss(noisy, 5, 6)) > 0.0


def test_target_dimensions_keep_ratio():
    assert target_dimensions(width=800, height=400, img_nrows=200) == (200, 400)


def test_deprocess_image_adds_mean_and_flips_channels():
    x = np.zeros((1, 2, 2, 3), dtype="float32")
    img = deprocess_image(x, 2, 2)
    expected_rgb = np.round(VGG19_MEAN_BGR[::-1]).astype("uint8")
    np.testing.assert_allclose(img[0, 0], expected_rgb, atol=1)


def tiny_vgg_like():
    inputs = tf.keras.Input(shape=(None, None, 3))
    x = layers.Conv2D(3, 3, padding="same", name="block1_conv1")(inputs)
    x = layers.Conv2D(3, 3, padding="same", name="block2_conv1")(x)
    x = layers.Conv2D(3, 3, padding="same", name="block2_conv2")(x)
    return tf.keras.Model(inputs, x)


LOSS_KWARGS = {"content_layer": "block2_conv2", "style_layers": ["block1_conv1", "block2_conv1"]}


def test_compute_loss_on_tiny_extractor():
    extractor = build_feature_extractor(model=tiny_vgg_like())
    base = tf.random.uniform((1, 8, 8, 3))
    style = tf.random.uniform((1, 8, 8, 3))
    loss = compute_loss(extractor, base, base, style, 8, 8, **LOSS_KWARGS)
    assert float(loss) > 0.0


def test_evaluator_caches_gradients():
    extractor = build_feature_extractor(model=tiny_vgg_like())
    base = tf.random.uniform((1, 8, 8, 3))
    style = tf.random.uniform((1, 8, 8, 3))
    evaluator = Evaluator(extractor, base, style, 8, 8, **LOSS_KWARGS)

    x = np.random.random(8 * 8 * 3)
    loss = evaluator.loss(x)
    grads = evaluator.grads(x)
    assert isinstance(loss, float)
    assert grads.shape == x.shape
    assert grads.dtype == np.float64
    assert evaluator.loss_value is None


def test_run_style_transfer_writes_one_image_per_iteration(tmp_path):
    rng = np.random.default_rng(0)
    base_path = str(tmp_path / "base.png")
    style_path = str(tmp_path / "style.png")
    cv2.imwrite(base_path, rng.integers(0, 256, (8, 12, 3), dtype=np.uint8))
    cv2.imwrite(style_path, rng.integers(0, 256, (10, 10, 3), dtype=np.uint8))

    prefix = str(tmp_path / "out")
    img = run_style_transfer(base_path, style_path, iterations=2, img_nrows=8, result_prefix=prefix,
        feature_extractor=build_feature_extractor(model=tiny_vgg_like()), maxfun=2, **LOSS_KWARGS)
    assert img.dtype == np.uint8
    assert img.shape == (8, 12, 3)
    assert os.path.exists(prefix + "_at_iteration_0.png")
    assert os.path.exists(prefix + "_at_iteration_1.png")


def test_preprocess_image_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        preprocess_image(str(tmp_path / "missing.jpg"), 8, 8)
