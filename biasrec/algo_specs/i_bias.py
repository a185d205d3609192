"""
Item biases only.
"""
from scipy.stats import loguniform
from ..algorithms.bias import SequentialBias

axes = ('item',)

grid = dict(start=0, stop=100, step=5)

space = [
    ('shrinkage', loguniform(1.0e-3, 1000)),
]

def default():
    return SequentialBias(axes)

def from_params(shrinkage, **kwargs):
    return SequentialBias(axes, shrinkage=shrinkage)
