"""
DeepDream with InceptionV3
@date : 03/10/2022
"""

import tensorflow as tf
from colorama import Fore, Style

from dl_notebooks.shared.utils import print_ram_used, print_section
from dl_notebooks.deep_dream.deep_dream import preprocess_image, build_feature_extractor, \
    run_deep_dream, save_img


BASE_IMAGE_URL = "https://i.imgur.com/aGBdQyK.jpg"
RESULT_PREFIX = "dream"

LAYER_SETTINGS = {
    "mixed4": 1.0,
    "mixed5": 1.5,
    "mixed6": 2.0,
    "mixed7": 2.5,
}

STEP = 0.01          # gradient ascent step size
NUM_OCTAVE = 3       # number of scales
OCTAVE_SCALE = 1.4   # size ratio between scales
ITERATIONS = 20      # ascent steps per scale
MAX_LOSS = 15.0


def main():
    base_image_path = tf.keras.utils.get_file("sky.jpg", BASE_IMAGE_URL)

    print_section("loading InceptionV3")
    model = tf.keras.applications.inception_v3.InceptionV3(weights="imagenet", include_top=False)
    feature_extractor = build_feature_extractor(model, LAYER_SETTINGS)
    print_ram_used()

    original_img = preprocess_image(base_image_path)
    img = run_deep_dream(original_img, feature_extractor, LAYER_SETTINGS,
        step=STEP, num_octave=NUM_OCTAVE, octave_scale=OCTAVE_SCALE,
        iterations=ITERATIONS, max_loss=MAX_LOSS)

    save_img(img, f"{RESULT_PREFIX}.png")
    print(Fore.GREEN + f"Image saved : {RESULT_PREFIX}.png" + Style.RESET_ALL)


if __name__ == "__main__":
    main()
