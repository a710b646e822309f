"""
Pretrained GloVe word embeddings
@date : 22/09/2022
"""

import numpy as np
from tqdm import tqdm


def load_glove_index(path):
    embeddings_index = {}
    with open(path, encoding="utf-8") as f:
        for line in tqdm(f, desc="GloVe"):
            values = line.rstrip().split(" ")
            if len(values) < 2:
                raise ValueError(f"malformed GloVe line : {line[:50]!r}")
            word = values[0]
            coefs = np.asarray(values[1:], dtype="float32")
            embeddings_index[word] = coefs
    print(f"Found {len(embeddings_index)} word vectors.")
    return embeddings_index


"""
EMBEDDING MATRIX : (max_words, embedding_dim)
row i = GloVe vector of the word of index i in the vocabulary.
Words not found in the index (and the padding / [UNK] rows) stay all-zeros.
"""
def build_embedding_matrix(vocabulary, embeddings_index, max_words, embedding_dim):
    embedding_matrix = np.zeros((max_words, embedding_dim))
    for i, word in enumerate(vocabulary):
        if i >= max_words:
            break
        embedding_vector = embeddings_index.get(word)
        if embedding_vector is not None:
            if embedding_vector.shape[0] != embedding_dim:
                raise ValueError(f"vector of '{word}' has {embedding_vector.shape[0]} dims, expected {embedding_dim}")
            embedding_matrix[i] = embedding_vector
    return embedding_matrix
