"""
Neural style transfer : VGG19 features and L-BFGS optimization of the pixels
@date : 10/10/2022
"""

import time

import cv2
import numpy as np
import tensorflow as tf
from scipy.optimize import fmin_l_bfgs_b
from colorama import Fore, Style

from dl_notebooks.style_transfer.losses import compute_loss


IMG_NROWS = 400
VGG19_MEAN_BGR = np.array([103.939, 116.779, 123.68], dtype="float32")


def target_dimensions(width, height, img_nrows=IMG_NROWS):
    img_ncols = int(width * img_nrows / height)
    return img_nrows, img_ncols


def read_image_size(image_path):
    img = cv2.imread(image_path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(image_path)
    height, width = img.shape[:2]
    return width, height


###-----------------------------------------------------------------###
###                         IMAGE UTILITIES                         ###
###-----------------------------------------------------------------###

def preprocess_image(image_path, img_nrows, img_ncols):
    img = cv2.imread(image_path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(image_path)
    img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    img = cv2.resize(img, (img_ncols, img_nrows), interpolation=cv2.INTER_AREA)
    img = img.astype("float32")[np.newaxis, ...] #(1, nrows, ncols, 3)
    # RGB -> BGR and mean-centering, as VGG19 was trained
    img = tf.keras.applications.vgg19.preprocess_input(img)
    return tf.convert_to_tensor(img)


def deprocess_image(x, img_nrows, img_ncols):
    x = np.array(x, dtype="float32").reshape((img_nrows, img_ncols, 3))
    x += VGG19_MEAN_BGR
    # BGR -> RGB
    x = x[:, :, ::-1]
    return np.clip(x, 0, 255).astype("uint8")


def save_img(img, path):
    cv2.imwrite(path, cv2.cvtColor(img, cv2.COLOR_RGB2BGR))


###-----------------------------------------------------------------###
###                              MODEL                              ###
###-----------------------------------------------------------------###

def build_feature_extractor(weights="imagenet", model=None):
    if model is None:
        model = tf.keras.applications.vgg19.VGG19(weights=weights, include_top=False)
    outputs_dict = dict([(layer.name, layer.output) for layer in model.layers])
    return tf.keras.Model(inputs=model.inputs, outputs=outputs_dict)


###-----------------------------------------------------------------###
###                              L-BFGS                             ###
###-----------------------------------------------------------------###

"""
scipy.optimize.fmin_l_bfgs_b needs two separate functions, one for the loss
and one for the gradients, on flat float64 vectors.
Computing them separately would be wasteful : the Evaluator computes both
in one pass and keeps the gradients for the following call.
"""
class Evaluator(object):

    def __init__(self, feature_extractor, base_image, style_reference_image, img_nrows, img_ncols, **loss_kwargs):
        self.feature_extractor = feature_extractor
        self.base_image = base_image
        self.style_reference_image = style_reference_image
        self.img_nrows = img_nrows
        self.img_ncols = img_ncols
        self.loss_kwargs = loss_kwargs
        self.loss_value = None
        self.grad_values = None

    def compute_loss_and_grads(self, x):
        combination_image = tf.convert_to_tensor(
            x.reshape((1, self.img_nrows, self.img_ncols, 3)), dtype=tf.float32)
        with tf.GradientTape() as tape:
            tape.watch(combination_image)
            loss = compute_loss(self.feature_extractor, combination_image,
                self.base_image, self.style_reference_image,
                self.img_nrows, self.img_ncols, **self.loss_kwargs)
        grads = tape.gradient(loss, combination_image)
        return float(loss), grads.numpy().flatten().astype("float64")

    def loss(self, x):
        assert self.loss_value is None
        loss_value, grad_values = self.compute_loss_and_grads(x)
        self.loss_value = loss_value
        self.grad_values = grad_values
        return self.loss_value

    def grads(self, x):
        assert self.loss_value is not None
        grad_values = np.copy(self.grad_values)
        self.loss_value = None
        self.grad_values = None
        return grad_values


def run_style_transfer(base_image_path, style_reference_image_path, iterations=20, img_nrows=IMG_NROWS,
                       result_prefix="style_transfer_result", feature_extractor=None, maxfun=20, **loss_kwargs):
    width, height = read_image_size(base_image_path)
    img_nrows, img_ncols = target_dimensions(width, height, img_nrows)

    base_image = preprocess_image(base_image_path, img_nrows, img_ncols)
    style_reference_image = preprocess_image(style_reference_image_path, img_nrows, img_ncols)

    if feature_extractor is None:
        feature_extractor = build_feature_extractor()

    evaluator = Evaluator(feature_extractor, base_image, style_reference_image, img_nrows, img_ncols, **loss_kwargs)

    # the generated image starts from the base image
    x = base_image.numpy().flatten().astype("float64")
    img = deprocess_image(x, img_nrows, img_ncols)
    for i in range(iterations):
        print(Style.BRIGHT + f"Start of iteration {i}" + Style.RESET_ALL)
        start_time = time.time()
        x, min_val, info = fmin_l_bfgs_b(evaluator.loss, x, fprime=evaluator.grads, maxfun=maxfun)
        print(f"Current loss value: {min_val:.2f}")
        img = deprocess_image(np.copy(x), img_nrows, img_ncols)
        if result_prefix is not None:
            fname = f"{result_prefix}_at_iteration_{i}.png"
            save_img(img, fname)
            print(Fore.GREEN + f"Image saved as {fname}" + Style.RESET_ALL)
        print(f"Iteration {i} completed in {time.time() - start_time:.2f}s")
    return img
