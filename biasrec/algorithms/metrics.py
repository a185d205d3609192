"""
Prediction accuracy metrics.
"""

import numpy as np

from .errors import ShapeMismatch, EmptyInput


def rmse(actual, predicted):
    """
    Compute the root mean squared error between two sequences.

    Positions correspond to each other, so this does *not* align pandas
    objects on their index.  Missing values are not dropped: a NaN in either
    input makes the result NaN.  Filter before calling if that is not what
    you want, since dropping positions changes the denominator.

    Args:
        actual: the observed values.
        predicted: the predicted values.

    Returns:
        float: the RMSE.
    """
    actual = np.asarray(actual, dtype='f8')
    predicted = np.asarray(predicted, dtype='f8')
    if actual.shape != predicted.shape:
        raise ShapeMismatch('cannot compare {} values with {} predictions'.format(
            len(actual), len(predicted)))
    if len(actual) == 0:
        raise EmptyInput('no values to score')

    errs = actual - predicted
    return float(np.sqrt(np.mean(np.square(errs))))
