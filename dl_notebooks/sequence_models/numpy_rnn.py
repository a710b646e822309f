"""
What a recurrent layer does, in NumPy
@date : 27/09/2022
"""

import numpy as np


"""
SIMPLE RNN
For each timestep t :
    output_t = tanh( W.input_t + U.state_t + b )
    state_t+1 = output_t

inputs : (timesteps, input_features)
W : (output_features, input_features)
U : (output_features, output_features)
b : (output_features,)
"""
def simple_rnn_forward(inputs, W, U, b, initial_state=None):
    inputs = np.asarray(inputs)
    output_features = W.shape[0]
    if W.shape[1] != inputs.shape[-1]:
        raise ValueError(f"W expects {W.shape[1]} input features, inputs have {inputs.shape[-1]}")

    state_t = np.zeros((output_features,)) if initial_state is None else np.asarray(initial_state)

    successive_outputs = []
    for input_t in inputs:
        output_t = np.tanh(np.dot(W, input_t) + np.dot(U, state_t) + b) #(output_features,)
        successive_outputs.append(output_t)
        state_t = output_t

    return np.stack(successive_outputs, axis=0) #(timesteps, output_features)


def random_rnn_parameters(input_features, output_features, rng=None):
    rng = rng if rng is not None else np.random.default_rng()
    W = rng.random((output_features, input_features))
    U = rng.random((output_features, output_features))
    b = rng.random((output_features,))
    return W, U, b
