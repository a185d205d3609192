"""
Item, user, and category biases, fit in that order.
"""
from scipy.stats import loguniform
from ..algorithms.bias import SequentialBias

axes = ('item', 'user', 'category')

grid = dict(start=0, stop=50, step=1)

space = [
    ('shrinkage', loguniform(1.0e-3, 1000)),
]

def default():
    return SequentialBias(axes)

def from_params(shrinkage, **kwargs):
    return SequentialBias(axes, shrinkage=shrinkage)
