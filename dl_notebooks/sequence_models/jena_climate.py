"""
Temperature forecasting on the Jena climate dataset : data pipeline
@date : 29/09/2022
"""

import numpy as np
import pandas as pd
import tensorflow as tf


JENA_URL = "https://s3.amazonaws.com/keras-datasets/jena_climate_2009_2016.csv.zip"
TEMPERATURE_COLUMN = 1   # "T (degC)" once "Date Time" is dropped

LOOKBACK = 1440   # 10 days of observations (1 every 10 minutes)
STEP = 6          # 1 point per hour
DELAY = 144       # target 24 hours in the future
BATCH_SIZE = 128
TRAIN_END = 200000
VAL_END = 300000


def load_jena_climate(path=None):
    if path is None:
        path = tf.keras.utils.get_file("jena_climate_2009_2016.csv.zip", origin=JENA_URL)
    df = pd.read_csv(path)
    header = list(df.columns[1:])
    float_data = df.iloc[:, 1:].to_numpy(dtype="float32") #(n_timesteps, 14)
    print("Columns :", header)
    print("float_data :", float_data.shape)
    return float_data, header


def normalize(float_data, train_end=TRAIN_END):
    mean = float_data[:train_end].mean(axis=0)
    std = float_data[:train_end].std(axis=0)
    return (float_data - mean) / std, mean, std


"""
GENERATOR
yields (samples, targets) forever :
samples : (batch_size, ceil(lookback / step), n_features)
targets : (batch_size,) temperature `delay` timesteps after the last sample

min_index / max_index delimit the part of data used (train, val or test)
"""
def sequence_generator(data, lookback, delay, min_index, max_index, shuffle=False,
                       batch_size=BATCH_SIZE, step=STEP, target_column=TEMPERATURE_COLUMN, rng=None):
    if max_index is None:
        max_index = len(data) - delay - 1
    if min_index + lookback >= max_index:
        raise ValueError(f"no room for lookback={lookback} between {min_index} and {max_index}")
    rng = rng if rng is not None else np.random.default_rng()
    timesteps = len(range(0, lookback, step))

    i = min_index + lookback
    while True:
        if shuffle:
            rows = rng.integers(min_index + lookback, max_index, size=batch_size)
        else:
            if i + batch_size >= max_index:
                i = min_index + lookback
            rows = np.arange(i, min(i + batch_size, max_index))
            i += len(rows)

        samples = np.zeros((len(rows), timesteps, data.shape[-1]))
        targets = np.zeros((len(rows),))
        for j, row in enumerate(rows):
            indices = range(rows[j] - lookback, rows[j], step)
            samples[j] = data[indices]
            targets[j] = data[rows[j] + delay][target_column]
        yield samples, targets


"""
NAIVE BASELINE : the temperature in 24h is the temperature now.
Any model must beat this MAE to be worth anything.
"""
def evaluate_naive_method(generator, steps, target_column=TEMPERATURE_COLUMN):
    batch_maes = []
    for _ in range(steps):
        samples, targets = next(generator)
        preds = samples[:, -1, target_column]
        mae = np.mean(np.abs(preds - targets))
        batch_maes.append(mae)
    return float(np.mean(batch_maes))


def make_generators(float_data, lookback=LOOKBACK, delay=DELAY, step=STEP, batch_size=BATCH_SIZE,
                    train_end=TRAIN_END, val_end=VAL_END):
    train_gen = sequence_generator(float_data, lookback=lookback, delay=delay,
        min_index=0, max_index=train_end, shuffle=True, step=step, batch_size=batch_size)
    val_gen = sequence_generator(float_data, lookback=lookback, delay=delay,
        min_index=train_end + 1, max_index=val_end, step=step, batch_size=batch_size)
    test_gen = sequence_generator(float_data, lookback=lookback, delay=delay,
        min_index=val_end + 1, max_index=None, step=step, batch_size=batch_size)

    # how many batches to draw to see the whole set
    val_steps = (val_end - (train_end + 1) - lookback) // batch_size
    test_steps = (len(float_data) - (val_end + 1) - lookback) // batch_size
    return (train_gen, val_gen, test_gen), (val_steps, test_steps)
