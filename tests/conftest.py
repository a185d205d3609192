import pandas as pd
from pytest import fixture


@fixture
def train():
    "Small training set: 3 users, 3 items, 2 categories."
    return pd.DataFrame.from_records([
        ('u1', 'i1', 'Drama', 5.0),
        ('u2', 'i1', 'Drama', 4.0),
        ('u3', 'i1', 'Drama', 5.0),
        ('u1', 'i2', 'Comedy', 1.0),
        ('u2', 'i2', 'Comedy', 2.0),
        ('u3', 'i2', 'Comedy', 1.0),
        ('u1', 'i3', 'Comedy', 3.0),
        ('u2', 'i3', 'Comedy', 4.0),
    ], columns=['user', 'item', 'category', 'rating'])


@fixture
def evaluation():
    "Evaluation ratings, including a user never seen in training."
    return pd.DataFrame.from_records([
        ('u4', 'i1', 'Drama', 5.0),
        ('u4', 'i2', 'Comedy', 2.0),
        ('u3', 'i3', 'Comedy', 3.0),
    ], columns=['user', 'item', 'category', 'rating'])
