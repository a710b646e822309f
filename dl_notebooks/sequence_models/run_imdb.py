"""
IMDB sentiment : recurrent and convolutional classifiers
@date : 27/09/2022
"""

import numpy as np
from colorama import Fore, Style

from dl_notebooks.shared.utils import print_section, plot_history, LogTrainingCallback
from dl_notebooks.sequence_models.numpy_rnn import simple_rnn_forward, random_rnn_parameters
from dl_notebooks.sequence_models.imdb_models import load_imdb_sequences, reverse_sequences, \
    build_simple_rnn_model, build_lstm_model, build_bidirectional_lstm_model, build_conv1d_model, \
    MAX_FEATURES, MAXLEN


EPOCHS = 10
BATCH_SIZE = 128
VALIDATION_SPLIT = 0.2


def fit_and_report(name, model, x_train, y_train, epochs=EPOCHS, batch_size=BATCH_SIZE):
    print_section(name)
    model.summary()
    history = model.fit(x_train, y_train,
        epochs=epochs,
        batch_size=batch_size,
        validation_split=VALIDATION_SPLIT,
        callbacks=[LogTrainingCallback(header=name)])
    best = max(history.history["val_acc"])
    print(Fore.GREEN + f"{name} : best validation accuracy {best:.4f}" + Style.RESET_ALL)
    return history


def main():
    print_section("NumPy simple RNN")
    inputs = np.random.random((100, 32)) #(timesteps, input_features)
    W, U, b = random_rnn_parameters(32, 64)
    outputs = simple_rnn_forward(inputs, W, U, b)
    print("outputs :", outputs.shape) #(100, 64)

    (x_train, y_train), (x_test, y_test) = load_imdb_sequences(MAX_FEATURES, MAXLEN)

    fit_and_report("SimpleRNN", build_simple_rnn_model(), x_train, y_train)
    history = fit_and_report("LSTM", build_lstm_model(), x_train, y_train)
    plot_history(history, "acc")
    fit_and_report("LSTM, reversed sequences", build_lstm_model(), reverse_sequences(x_train), y_train)
    fit_and_report("Bidirectional LSTM", build_bidirectional_lstm_model(), x_train, y_train)
    fit_and_report("Conv1D", build_conv1d_model(), x_train, y_train)


if __name__ == "__main__":
    main()
