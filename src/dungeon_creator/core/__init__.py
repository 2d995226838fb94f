from .random import RandomSource

__all__ = ["RandomSource"]
