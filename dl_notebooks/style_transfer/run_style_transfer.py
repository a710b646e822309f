"""
Neural style transfer : Starry Night on San Francisco
@date : 10/10/2022
"""

import tensorflow as tf

from dl_notebooks.shared.utils import print_ram_used, print_section
from dl_notebooks.style_transfer.neural_style_transfer import run_style_transfer, build_feature_extractor


BASE_IMAGE_URL = "https://i.imgur.com/F28w3Ac.jpg"
STYLE_IMAGE_URL = "https://i.imgur.com/9ooB60I.jpg"
RESULT_PREFIX = "paris_generated"
ITERATIONS = 20
IMG_NROWS = 400


def main():
    base_image_path = tf.keras.utils.get_file("paris.jpg", BASE_IMAGE_URL)
    style_reference_image_path = tf.keras.utils.get_file("starry_night.jpg", STYLE_IMAGE_URL)

    print_section("loading VGG19")
    feature_extractor = build_feature_extractor(weights="imagenet")
    print_ram_used()

    run_style_transfer(base_image_path, style_reference_image_path,
        iterations=ITERATIONS, img_nrows=IMG_NROWS,
        result_prefix=RESULT_PREFIX, feature_extractor=feature_extractor)


if __name__ == "__main__":
    main()
