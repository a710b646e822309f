"""
DCGAN training on CIFAR-10 frogs
@date : 18/10/2022
"""

from dl_notebooks.shared.utils import print_ram_used, print_section
from dl_notebooks.gan.dcgan import load_cifar10_class, build_generator, build_discriminator, GANTrainer, \
    LATENT_DIM, HEIGHT, WIDTH, CHANNELS


ITERATIONS = 10000
BATCH_SIZE = 20
SAVE_DIR = "gan_images"
SAVE_EVERY = 100
FROG_CLASS = 6


def main():
    x_train = load_cifar10_class(FROG_CLASS)

    generator = build_generator(LATENT_DIM, HEIGHT, WIDTH, CHANNELS)
    discriminator = build_discriminator(HEIGHT, WIDTH, CHANNELS)
    generator.summary()
    discriminator.summary()
    print_ram_used()

    print_section("adversarial training")
    trainer = GANTrainer(generator, discriminator, LATENT_DIM)
    trainer.train(x_train, iterations=ITERATIONS, batch_size=BATCH_SIZE, save_dir=SAVE_DIR, save_every=SAVE_EVERY)


if __name__ == "__main__":
    main()
