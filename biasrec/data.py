"""
Loading and splitting rating data.
"""

import logging

from lenskit.datasets import MovieLens
import seedbank

from .algorithms.records import RATING_COLUMNS, as_ratings

_log = logging.getLogger(__name__)


def attach_categories(ratings, movies, column='genres'):
    """
    Add each rated item's category label to a rating frame.

    Args:
        ratings(pandas.DataFrame): ratings with an ``item`` column.
        movies(pandas.DataFrame): item metadata, indexed by item ID.
        column(str): the metadata column holding the category label.

    Returns:
        pandas.DataFrame:
            the ratings with a ``category`` column.  The label is kept as-is,
            so a multi-valued label like ``Action|Comedy`` is a single category.
            Items with no metadata get a missing category.
    """
    cats = movies[column]
    return ratings.assign(category=ratings['item'].map(cats))


def load_movielens(path):
    "Load MovieLens ratings with their genre labels as categories."
    ml = MovieLens(path)
    _log.info('reading ratings from %s', ml)
    ratings = attach_categories(ml.ratings, ml.movies)
    return as_ratings(ratings[list(RATING_COLUMNS)])


def split_ratings(ratings, tune_frac=0.1, val_frac=0.1, rng_spec=None):
    """
    Split ratings into disjoint training, tuning, and validation sets.

    Rows are assigned at random; every row lands in exactly one set.

    Args:
        ratings(pandas.DataFrame): the ratings to split.
        tune_frac(float): the fraction of ratings for tuning.
        val_frac(float): the fraction of ratings for final validation.
        rng_spec: the random number specification (see :mod:`seedbank`).

    Returns:
        tuple: ``(train, tune, validation)`` rating frames.
    """
    if tune_frac < 0 or val_frac < 0 or tune_frac + val_frac >= 1:
        raise ValueError('invalid split fractions {}, {}'.format(tune_frac, val_frac))

    n = len(ratings)
    n_tune = int(round(n * tune_frac))
    n_val = int(round(n * val_frac))

    rng = seedbank.numpy_rng(rng_spec)
    perm = rng.permutation(n)
    tune = ratings.iloc[perm[:n_tune]]
    val = ratings.iloc[perm[n_tune:n_tune + n_val]]
    train = ratings.iloc[perm[n_tune + n_val:]]
    _log.info('split %d ratings into %d train, %d tune, %d validation',
              n, len(train), len(tune), len(val))
    return train, tune, val
