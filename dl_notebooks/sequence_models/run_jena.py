"""
Temperature forecasting : naive baseline, dense network, recurrent networks
@date : 29/09/2022
"""

from colorama import Fore, Style

from dl_notebooks.shared.utils import print_ram_used, print_section, plot_history, LogTrainingCallback
from dl_notebooks.sequence_models.jena_climate import load_jena_climate, normalize, make_generators, \
    evaluate_naive_method, LOOKBACK, STEP, TEMPERATURE_COLUMN
from dl_notebooks.sequence_models.temperature_models import build_dense_model, build_gru_model, \
    build_bidirectional_gru_model, build_conv1d_gru_model


STEPS_PER_EPOCH = 500
EPOCHS = 20


def fit_generator(name, model, train_gen, val_gen, val_steps, epochs=EPOCHS):
    print_section(name)
    history = model.fit(train_gen,
        steps_per_epoch=STEPS_PER_EPOCH,
        epochs=epochs,
        validation_data=val_gen,
        validation_steps=val_steps,
        callbacks=[LogTrainingCallback(header=name)])
    plot_history(history, "loss")
    return history


def main():
    float_data, header = load_jena_climate()
    float_data, mean, std = normalize(float_data)
    n_features = float_data.shape[-1]
    print_ram_used()

    (train_gen, val_gen, _), (val_steps, _) = make_generators(float_data)

    naive_mae = evaluate_naive_method(val_gen, val_steps)
    print(Fore.YELLOW + f"Naive baseline MAE : {naive_mae:.4f} -> {naive_mae * std[TEMPERATURE_COLUMN]:.2f} degC" + Style.RESET_ALL)

    fit_generator("Dense", build_dense_model(len(range(0, LOOKBACK, STEP)), n_features), train_gen, val_gen, val_steps)
    fit_generator("GRU", build_gru_model(n_features), train_gen, val_gen, val_steps)
    fit_generator("GRU with dropout",
        build_gru_model(n_features, dropout=0.2, recurrent_dropout=0.2), train_gen, val_gen, val_steps, epochs=40)
    fit_generator("Stacked GRU",
        build_gru_model(n_features, dropout=0.1, recurrent_dropout=0.5, stacked=True), train_gen, val_gen, val_steps, epochs=40)
    fit_generator("Bidirectional GRU", build_bidirectional_gru_model(n_features), train_gen, val_gen, val_steps, epochs=40)
    fit_generator("Conv1D + GRU", build_conv1d_gru_model(n_features), train_gen, val_gen, val_steps)


if __name__ == "__main__":
    main()
