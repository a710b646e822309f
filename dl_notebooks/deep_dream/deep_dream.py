"""
DeepDream : gradient ascent on the activations of a pretrained convnet
@date : 03/10/2022
"""

import cv2
import numpy as np
import tensorflow as tf


###-----------------------------------------------------------------###
###                         IMAGE UTILITIES                         ###
###-----------------------------------------------------------------###

def preprocess_image(image_path, max_dim=None):
    img = cv2.imread(image_path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(image_path)
    img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    if max_dim is not None and max(img.shape[:2]) > max_dim:
        scale = max_dim / max(img.shape[:2])
        img = cv2.resize(img, (int(img.shape[1]*scale), int(img.shape[0]*scale)), interpolation=cv2.INTER_AREA)
    img = img.astype("float32")[np.newaxis, ...] #(1, H, W, 3)
    return tf.keras.applications.inception_v3.preprocess_input(img)


def deprocess_image(x):
    # inverse of inception_v3.preprocess_input : [-1, 1] -> [0, 255]
    x = np.array(x).reshape((x.shape[1], x.shape[2], 3))
    x /= 2.0
    x += 0.5
    x *= 255.0
    return np.clip(x, 0, 255).astype("uint8")


def resize_img(img, size):
    """Resize a (1, H, W, C) batch to size=(H', W')."""
    img = np.array(img, dtype="float32")
    resized = cv2.resize(img[0], (int(size[1]), int(size[0])), interpolation=cv2.INTER_CUBIC)
    return resized.reshape((1, int(size[0]), int(size[1]), img.shape[-1]))


def save_img(img, path):
    img = deprocess_image(np.copy(img))
    cv2.imwrite(path, cv2.cvtColor(img, cv2.COLOR_RGB2BGR))


###-----------------------------------------------------------------###
###                               LOSS                              ###
###-----------------------------------------------------------------###

"""
The loss to MAXIMIZE is the weighted sum of the L2 norm of the activations
of a few layers. Lower layers give geometric patterns, higher layers give
recognizable shapes (eyes, dogs, ...).

{"mixed4": 1.0, "mixed5": 1.5, "mixed6": 2.0, "mixed7": 2.5}
"""
def build_feature_extractor(model, layer_settings):
    outputs_dict = dict(
        [(name, model.get_layer(name).output) for name in layer_settings.keys()]
    )
    return tf.keras.Model(inputs=model.inputs, outputs=outputs_dict)


def compute_loss(feature_extractor, layer_settings, image):
    features = feature_extractor(image)
    loss = tf.zeros(shape=())
    for name in features.keys():
        coeff = layer_settings[name]
        activation = features[name]
        # border artifacts are ignored
        scaling = tf.reduce_prod(tf.cast(tf.shape(activation), "float32"))
        loss += coeff * tf.reduce_sum(tf.square(activation[:, 2:-2, 2:-2, :])) / scaling
    return loss


###-----------------------------------------------------------------###
###                          GRADIENT ASCENT                        ###
###-----------------------------------------------------------------###

def gradient_ascent_step(feature_extractor, layer_settings, image, step):
    with tf.GradientTape() as tape:
        tape.watch(image)
        loss = compute_loss(feature_extractor, layer_settings, image)
    grads = tape.gradient(loss, image)
    # normalize gradients
    grads /= tf.maximum(tf.reduce_mean(tf.abs(grads)), 1e-7)
    image += step * grads
    return loss, image


def gradient_ascent_loop(feature_extractor, layer_settings, image, iterations, step, max_loss=None, verbose=True):
    image = tf.convert_to_tensor(image, dtype=tf.float32)
    for i in range(iterations):
        loss, image = gradient_ascent_step(feature_extractor, layer_settings, image, step)
        if max_loss is not None and loss > max_loss:
            break
        if verbose:
            print(f"... Loss value at step {i}: {float(loss):.2f}")
    return image.numpy()


"""
OCTAVES
The image is processed at successive scales, smallest first :
original (H, W) -> (H/1.4, W/1.4) -> (H/1.4^2, W/1.4^2)
processed in reverse order.
"""
def octave_shapes(original_shape, num_octave=3, octave_scale=1.4):
    original_shape = tuple(int(dim) for dim in original_shape)
    successive_shapes = [original_shape]
    for i in range(1, num_octave):
        shape = tuple([int(dim / (octave_scale ** i)) for dim in original_shape])
        successive_shapes.append(shape)
    return successive_shapes[::-1]


def run_deep_dream(original_img, feature_extractor, layer_settings, step=0.01, num_octave=3,
                   octave_scale=1.4, iterations=20, max_loss=15.0, verbose=True):
    original_img = np.array(original_img, dtype="float32")
    successive_shapes = octave_shapes(original_img.shape[1:3], num_octave, octave_scale)

    shrunk_original_img = resize_img(original_img, successive_shapes[0])
    img = np.copy(original_img)

    for i, shape in enumerate(successive_shapes):
        if verbose:
            print(f"Processing octave {i} with shape {shape}")
        img = resize_img(img, shape)
        img = gradient_ascent_loop(feature_extractor, layer_settings, img,
            iterations=iterations, step=step, max_loss=max_loss, verbose=verbose)

        # re-inject the details lost when the original was shrunk
        upscaled_shrunk_original_img = resize_img(shrunk_original_img, shape)
        same_size_original = resize_img(original_img, shape)
        lost_detail = same_size_original - upscaled_shrunk_original_img
        img = img + lost_detail
        shrunk_original_img = resize_img(original_img, shape)

    return img
