"""
DCGAN : generating frogs (CIFAR-10, class 6)
@date : 18/10/2022
"""

import os

import cv2
import numpy as np
import tensorflow as tf
from tensorflow.keras import layers
from tqdm import tqdm

from dl_notebooks.shared.utils import append_log, LOG_PATH


LATENT_DIM = 32
HEIGHT = 32
WIDTH = 32
CHANNELS = 3


def load_cifar10_class(class_index=6):
    (x_train, y_train), (_, _) = tf.keras.datasets.cifar10.load_data()
    x_train = x_train[y_train.flatten() == class_index]
    x_train = x_train.reshape((x_train.shape[0],) + (HEIGHT, WIDTH, CHANNELS)).astype("float32") / 255.
    print("x_train : ", x_train.shape) #(5000, 32, 32, 3)
    return x_train


###-----------------------------------------------------------------###
###                            GENERATOR                            ###
###-----------------------------------------------------------------###

"""
latent vector (latent_dim,) -> image (height, width, channels)
- Dense then reshape to a (height/2, width/2) feature map
- Conv2DTranspose with stride 2 upsamples to (height, width)
- LeakyReLU everywhere (sparse gradients hinder GAN training)
- tanh on the last layer
"""
def build_generator(latent_dim=LATENT_DIM, height=HEIGHT, width=WIDTH, channels=CHANNELS, filters=256):
    assert height % 2 == 0 and width % 2 == 0
    generator_input = tf.keras.Input(shape=(latent_dim,))

    x = layers.Dense((filters // 2) * (height // 2) * (width // 2))(generator_input)
    x = layers.LeakyReLU()(x)
    x = layers.Reshape((height // 2, width // 2, filters // 2))(x)

    x = layers.Conv2D(filters, 5, padding="same")(x)
    x = layers.LeakyReLU()(x)

    # upsample to (height, width)
    x = layers.Conv2DTranspose(filters, 4, strides=2, padding="same")(x)
    x = layers.LeakyReLU()(x)

    x = layers.Conv2D(filters, 5, padding="same")(x)
    x = layers.LeakyReLU()(x)
    x = layers.Conv2D(filters, 5, padding="same")(x)
    x = layers.LeakyReLU()(x)

    x = layers.Conv2D(channels, 7, activation="tanh", padding="same")(x)
    return tf.keras.models.Model(generator_input, x, name="generator")


###-----------------------------------------------------------------###
###                          DISCRIMINATOR                          ###
###-----------------------------------------------------------------###

"""
image -> probability of being a GENERATED image
Strided convolutions instead of max pooling, dropout as a source of noise.
"""
def build_discriminator(height=HEIGHT, width=WIDTH, channels=CHANNELS, filters=128, dropout_rate=0.4):
    discriminator_input = tf.keras.Input(shape=(height, width, channels))
    x = layers.Conv2D(filters, 3)(discriminator_input)
    x = layers.LeakyReLU()(x)
    x = layers.Conv2D(filters, 4, strides=2)(x)
    x = layers.LeakyReLU()(x)
    x = layers.Conv2D(filters, 4, strides=2)(x)
    x = layers.LeakyReLU()(x)
    x = layers.Conv2D(filters, 4, strides=2)(x)
    x = layers.LeakyReLU()(x)
    x = layers.Flatten()(x)

    x = layers.Dropout(dropout_rate)(x)

    x = layers.Dense(1, activation="sigmoid")(x)
    return tf.keras.models.Model(discriminator_input, x, name="discriminator")


def add_label_noise(labels, scale=0.05, rng=None):
    rng = rng if rng is not None else np.random.default_rng()
    return labels + scale * rng.random(labels.shape)


def save_image(img, path):
    img = np.clip(np.array(img) * 255., 0, 255).astype("uint8")
    cv2.imwrite(path, cv2.cvtColor(img, cv2.COLOR_RGB2BGR))


###-----------------------------------------------------------------###
###                          ADVERSARIAL LOOP                       ###
###-----------------------------------------------------------------###

class GANTrainer(object):
    """Alternates one discriminator update and one generator update per batch.

    Labels : 1 = generated, 0 = real. The generator is trained to make the
    discriminator answer "real" (0) on generated images ; its own optimizer
    only touches the generator weights, so the discriminator stays frozen
    during that update.
    """

    def __init__(self, generator, discriminator, latent_dim=LATENT_DIM, d_learning_rate=0.0008,
                 g_learning_rate=0.0004, clipvalue=1.0, label_noise=0.05, seed=None):
        self.generator = generator
        self.discriminator = discriminator
        self.latent_dim = latent_dim
        self.label_noise = label_noise
        # clipvalue : gradient clipping, stabilizes training
        self.d_optimizer = tf.keras.optimizers.RMSprop(learning_rate=d_learning_rate, clipvalue=clipvalue)
        self.g_optimizer = tf.keras.optimizers.RMSprop(learning_rate=g_learning_rate, clipvalue=clipvalue)
        self.loss_fn = tf.keras.losses.BinaryCrossentropy()
        self.rng = np.random.default_rng(seed)
        self.last_generated_images = None

    def sample_latent(self, batch_size):
        return self.rng.normal(size=(batch_size, self.latent_dim)).astype("float32")

    def train_step(self, real_images):
        real_images = tf.convert_to_tensor(real_images, dtype=tf.float32)
        batch_size = real_images.shape[0]

        ## 1 -> discriminator on generated + real images
        generated_images = self.generator(self.sample_latent(batch_size), training=False)
        combined_images = tf.concat([generated_images, real_images], axis=0) #(2*batch_size, H, W, C)

        labels = np.concatenate([np.ones((batch_size, 1)), np.zeros((batch_size, 1))])
        labels = add_label_noise(labels, self.label_noise, self.rng).astype("float32")

        with tf.GradientTape() as tape:
            predictions = self.discriminator(combined_images, training=True)
            d_loss = self.loss_fn(labels, predictions)
        grads = tape.gradient(d_loss, self.discriminator.trainable_weights)
        self.d_optimizer.apply_gradients(zip(grads, self.discriminator.trainable_weights))

        ## 2 -> generator, through the discriminator, with "all real" targets
        misleading_targets = np.zeros((batch_size, 1), dtype="float32")
        with tf.GradientTape() as tape:
            predictions = self.discriminator(self.generator(self.sample_latent(batch_size), training=True), training=True)
            a_loss = self.loss_fn(misleading_targets, predictions)
        grads = tape.gradient(a_loss, self.generator.trainable_weights)
        self.g_optimizer.apply_gradients(zip(grads, self.generator.trainable_weights))

        self.last_generated_images = generated_images.numpy()
        return float(d_loss), float(a_loss)

    def train(self, x_train, iterations=10000, batch_size=20, save_dir="gan_images", save_every=100, log_path=LOG_PATH):
        if len(x_train) < batch_size:
            raise ValueError(f"{len(x_train)} images is less than one batch of {batch_size}")
        os.makedirs(save_dir, exist_ok=True)

        losses = []
        start = 0
        for step in tqdm(range(iterations)):
            stop = start + batch_size
            real_images = x_train[start: stop]
            d_loss, a_loss = self.train_step(real_images)
            losses.append((d_loss, a_loss))

            start += batch_size
            if start > len(x_train) - batch_size:
                start = 0

            if step % save_every == 0:
                self.generator.save_weights(os.path.join(save_dir, "generator.weights.h5"))
                line = f"[step] : {step} - [discriminator loss] : {d_loss:.4f} [adversarial loss] : {a_loss:.4f}"
                tqdm.write(line)
                append_log(log_path, line)
                save_image(self.last_generated_images[0], os.path.join(save_dir, f"generated_frog{step}.png"))
                save_image(real_images[0], os.path.join(save_dir, f"real_frog{step}.png"))
        return losses
