"""
Errors raised by the bias models and their evaluation code.
"""


class ShapeMismatch(ValueError):
    "Actual and predicted values have different lengths."


class EmptyInput(ValueError):
    "An error metric was asked to score zero values."


class InsufficientData(ValueError):
    "There is no training data to fit a model on."


class EmptyCandidateSet(ValueError):
    "A hyperparameter search was given nothing to search."
