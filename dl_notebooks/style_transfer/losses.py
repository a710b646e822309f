"""
Neural style transfer : the three loss terms
@date : 10/10/2022
"""

import tensorflow as tf


CONTENT_LAYER = "block5_conv2"
STYLE_LAYERS = [
    "block1_conv1",
    "block2_conv1",
    "block3_conv1",
    "block4_conv1",
    "block5_conv1",
]

CONTENT_WEIGHT = 0.025
STYLE_WEIGHT = 1.0
TOTAL_VARIATION_WEIGHT = 1e-4


"""
CONTENT LOSS
Distance between the activations of an upper layer for the base image
and for the generated (combination) image.
"""
def content_loss(base, combination):
    return tf.reduce_sum(tf.square(combination - base))


"""
GRAM MATRIX
Inner products between the feature maps of a layer : (H, W, C) -> (C, C)
It captures the correlations between features, i.e. the textures.
"""
def gram_matrix(x):
    x = tf.transpose(x, (2, 0, 1)) #(C, H, W)
    features = tf.reshape(x, (tf.shape(x)[0], -1)) #(C, H*W)
    gram = tf.matmul(features, tf.transpose(features)) #(C, C)
    return gram


def style_loss(style, combination, img_nrows, img_ncols):
    S = gram_matrix(style)
    C = gram_matrix(combination)
    channels = 3
    size = img_nrows * img_ncols
    return tf.reduce_sum(tf.square(S - C)) / (4.0 * (channels ** 2) * (size ** 2))


"""
TOTAL VARIATION LOSS
Regularization on the pixels of the combination image : neighbouring pixels
should stay close, so the result is spatially continuous.
"""
def total_variation_loss(x, img_nrows, img_ncols):
    a = tf.square(
        x[:, : img_nrows - 1, : img_ncols - 1, :] - x[:, 1:, : img_ncols - 1, :]
    )
    b = tf.square(
        x[:, : img_nrows - 1, : img_ncols - 1, :] - x[:, : img_nrows - 1, 1:, :]
    )
    return tf.reduce_sum(tf.pow(a + b, 1.25))


def compute_loss(feature_extractor, combination_image, base_image, style_reference_image,
                 img_nrows, img_ncols, content_layer=CONTENT_LAYER, style_layers=STYLE_LAYERS,
                 content_weight=CONTENT_WEIGHT, style_weight=STYLE_WEIGHT,
                 total_variation_weight=TOTAL_VARIATION_WEIGHT):
    # batch : [base, style, combination]
    input_tensor = tf.concat(
        [base_image, style_reference_image, combination_image], axis=0
    )
    features = feature_extractor(input_tensor)

    loss = tf.zeros(shape=())

    layer_features = features[content_layer]
    base_image_features = layer_features[0, :, :, :]
    combination_features = layer_features[2, :, :, :]
    loss = loss + content_weight * content_loss(base_image_features, combination_features)

    for layer_name in style_layers:
        layer_features = features[layer_name]
        style_reference_features = layer_features[1, :, :, :]
        combination_features = layer_features[2, :, :, :]
        sl = style_loss(style_reference_features, combination_features, img_nrows, img_ncols)
        loss += (style_weight / len(style_layers)) * sl

    loss += total_variation_weight * total_variation_loss(combination_image, img_nrows, img_ncols)
    return loss
