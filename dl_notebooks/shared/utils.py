"""
Helpers shared by every notebook : console output, training log file, plots.
"""

import time

import psutil
import matplotlib.pyplot as plt
from numpy import linspace
import tensorflow as tf
from colorama import Style, Fore


LOG_PATH = "LOG_training.txt"


def print_ram_used() -> None:
    ram_used_bytes = psutil.Process().memory_info().rss
    ram_used_MB = ram_used_bytes/(1024 * 1024)
    print( "------->> "+Fore.RED + Style.BRIGHT+ f"RAM used by process : {ram_used_MB:.2f} MB" + Style.RESET_ALL )


def print_section(title) -> None:
    print("__________________________________________________________________")
    print( Style.BRIGHT+Fore.CYAN+ f">>>>>>>>>> {title} <<<<<<<<<<" + Style.RESET_ALL )


def append_log(path, line) -> None:
    with open(path, "a") as f:
        f.write(line + "\n")


"""
One line per epoch, same format as the console output :
Time : 3min - [Epoch]: 2 - [LOSS] : 0.4211 [val_loss] : 0.4710
"""
class LogTrainingCallback( tf.keras.callbacks.Callback ):
    def __init__(self, log_path=LOG_PATH, header=None):
        super(LogTrainingCallback, self).__init__()
        self.log_path = log_path
        self.header = header
        self.start = None

    def on_train_begin(self, logs=None):
        self.start = time.time()
        if self.header is not None:
            append_log(self.log_path, f"CONFIG : {self.header}")

    def on_epoch_end(self, epoch, logs=None):
        logs = logs or {}
        current_min = int((time.time() - self.start)/60)
        line = f"Time : {current_min}min - [Epoch]: {epoch+1} - [LOSS] : {logs.get('loss', float('nan')):.4f}"
        for key in sorted(logs):
            if key != "loss":
                line += f" [{key}] : {logs[key]:.4f}"
        append_log(self.log_path, line)


def plot_history(history, metric="loss", path=None):
    """Training and validation curves of a keras History (or its dict)."""
    values = history.history if hasattr(history, "history") else history
    train_values = values[metric]
    ep = linspace(start=1, stop=len(train_values), num=len(train_values))

    plt.figure(metric.upper())
    plt.plot(ep, train_values, "bo", label=f"Training {metric}")
    if f"val_{metric}" in values:
        plt.plot(ep, values[f"val_{metric}"], "b", label=f"Validation {metric}")
    plt.xlabel("Epochs")
    plt.legend()
    if path is not None:
        plt.savefig(path)
        plt.close()
    else:
        plt.show()
