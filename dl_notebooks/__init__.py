"""
Deep learning notebooks : one technique per sub-package, all built on tf.keras.
"""

__version__ = "0.1.0"
