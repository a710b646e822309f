"""
Regression : median price of Boston houses, with K-fold validation
@date : 15/09/2022
"""

import numpy as np
import matplotlib.pyplot as plt
import tensorflow as tf
from tensorflow.keras import layers
from sklearn.model_selection import KFold

from dl_notebooks.shared.utils import print_section, LogTrainingCallback


K = 4
NUM_EPOCHS = 100
FINAL_EPOCHS = 80
BATCH_SIZE = 1
FINAL_BATCH_SIZE = 16


def load_boston_housing():
    (train_data, train_targets), (test_data, test_targets) = tf.keras.datasets.boston_housing.load_data()
    print("train_data : ", train_data.shape) #(404, 13)
    print("test_data : ", test_data.shape) #(102, 13)
    return (train_data, train_targets), (test_data, test_targets)


"""
NORMALIZATION : features have very different ranges (rate, age, ...)
x' = (x - mean) / std, mean and std computed on the TRAINING data only
"""
def normalize(train_data, test_data):
    mean = train_data.mean(axis=0)
    std = train_data.std(axis=0)
    return (train_data - mean) / std, (test_data - mean) / std


def build_model(n_features):
    model = tf.keras.models.Sequential()
    model.add(tf.keras.Input(shape=(n_features,)))
    model.add(layers.Dense(64, activation="relu"))
    model.add(layers.Dense(64, activation="relu"))
    # no activation : scalar regression
    model.add(layers.Dense(1))
    model.compile(optimizer="rmsprop", loss="mse", metrics=["mae"])
    return model


"""
K-FOLD VALIDATION
Few samples (404) : a single validation split would give a noisy score.
The data is split in k partitions, k models are trained on k-1 partitions
and evaluated on the remaining one. Score = mean of the k scores.
"""
def k_fold_validation(train_data, train_targets, k=K, num_epochs=NUM_EPOCHS, batch_size=BATCH_SIZE, verbose=0):
    if k < 2:
        raise ValueError(f"k must be >= 2, got {k}")
    all_scores = []
    all_mae_histories = []

    for i, (train_idx, val_idx) in enumerate(KFold(n_splits=k).split(train_data)):
        print(f"processing fold #{i}")
        model = build_model(train_data.shape[1])
        history = model.fit(train_data[train_idx], train_targets[train_idx],
            validation_data=(train_data[val_idx], train_targets[val_idx]),
            epochs=num_epochs, batch_size=batch_size, verbose=verbose)
        val_mse, val_mae = model.evaluate(train_data[val_idx], train_targets[val_idx], verbose=0)
        all_scores.append(val_mae)
        all_mae_histories.append(history.history["val_mae"])

    return all_scores, all_mae_histories


def smooth_curve(points, factor=0.9):
    smoothed_points = []
    for point in points:
        if smoothed_points:
            previous = smoothed_points[-1]
            smoothed_points.append(previous * factor + point * (1 - factor))
        else:
            smoothed_points.append(point)
    return smoothed_points


def plot_validation_mae(all_mae_histories, skip=10, path=None):
    average_mae_history = [
        np.mean([x[i] for x in all_mae_histories]) for i in range(len(all_mae_histories[0]))
    ]
    smooth_mae_history = smooth_curve(average_mae_history[skip:])

    plt.figure("MAE")
    plt.plot(range(1, len(smooth_mae_history) + 1), smooth_mae_history)
    plt.xlabel("Epochs")
    plt.ylabel("Validation MAE")
    if path is not None:
        plt.savefig(path)
        plt.close()
    else:
        plt.show()
    return average_mae_history


def main():
    (train_data, train_targets), (test_data, test_targets) = load_boston_housing()
    train_data, test_data = normalize(train_data, test_data)

    print_section(f"{K}-fold validation")
    all_scores, all_mae_histories = k_fold_validation(train_data, train_targets)
    print("Scores : ", all_scores)
    print(f"Mean MAE : {np.mean(all_scores):.4f}")
    plot_validation_mae(all_mae_histories)

    print_section("final model")
    model = build_model(train_data.shape[1])
    model.fit(train_data, train_targets, epochs=FINAL_EPOCHS, batch_size=FINAL_BATCH_SIZE, verbose=0,
        callbacks=[LogTrainingCallback(header="Boston housing, final model")])
    test_mse_score, test_mae_score = model.evaluate(test_data, test_targets)
    print(f"Test MAE : {test_mae_score:.4f} (k$)")


if __name__ == "__main__":
    main()
