"""
Sequential, damped rating biases.

A rating is modeled as the global mean plus one additive bias per
*axis* (a column of the rating frame: ``item``, ``user``, or ``category``):

.. math::
    r_{ui} = \\mu + b_i + b_u + b_c

The biases are fit one axis at a time.  Each axis is fit on the residuals
left after subtracting the mean and all the axes before it, so the order of
the axes changes the values in every table.  Each bias is damped by adding a
constant to the denominator of its mean, which pulls the biases of keys with
few ratings toward zero:

.. math::
    b_k = \\frac{\\sum_{r \\in R_k} (r - \\mu - p(r))}{|R_k| + \\gamma}

where :math:`p(r)` is the sum of the biases already fit for the rating.
"""

import logging
import numpy as np
import pandas as pd

from lenskit.algorithms import Predictor
from lenskit.util import Stopwatch

from .errors import InsufficientData

_log = logging.getLogger(__name__)

DEFAULT_AXES = ('item', 'user', 'category')


def estimate_bias(ratings, axis, mean, prior=None, shrinkage=0.0):
    """
    Estimate the biases for one axis.

    Args:
        ratings(pandas.DataFrame):
            The training ratings, with a ``rating`` column and a column named by
            ``axis``.
        axis(str):
            The column holding the keys to compute biases for.
        mean(float):
            The global mean rating.
        prior(pandas.Series or None):
            The bias already explained for each rating by previous axes, aligned
            with ``ratings``.  ``None`` means no previous axes.
        shrinkage(float):
            The damping term added to each key's rating count.  0 gives the plain
            mean residual; larger values shrink all biases toward 0.

    Returns:
        pandas.Series:
            The bias for each key observed in ``ratings``, indexed by key.
    """
    if shrinkage < 0:
        raise ValueError('shrinkage must be non-negative, got {}'.format(shrinkage))
    if len(ratings) == 0:
        raise InsufficientData('cannot estimate {} biases from no ratings'.format(axis))

    resid = ratings['rating'] - mean
    if prior is not None:
        resid = resid - prior

    groups = resid.groupby(ratings[axis])
    sums = groups.sum()
    counts = groups.count()
    biases = sums / (counts + shrinkage)
    biases.name = axis
    return biases


def _lookup(keys, table):
    "Look up biases for keys, with unknown keys contributing 0."
    return keys.map(table).fillna(0.0)


class SequentialBias(Predictor):
    """
    A bias model fit one axis at a time on the residuals of earlier axes.

    Attributes:
        mean_(float): the global mean rating.
        tables_(tuple of pandas.Series):
            the bias table for each axis, in order.  Each table is named after
            its axis and indexed by that axis's keys.  Do not modify them;
            :meth:`bias` returns copies.
        item_categories_(pandas.Series):
            the category of each training item, used to fill in categories when
            predicting for bare user-item pairs.
    """

    def __init__(self, axes=DEFAULT_AXES, shrinkage=0.0):
        """
        Args:
            axes(sequence of str):
                The columns to fit biases for, in order.
            shrinkage(float):
                The damping term applied to every axis.
        """
        self.axes = tuple(axes)
        self.shrinkage = shrinkage

    def fit(self, ratings, mean=None, **kwargs):
        """
        Fit the bias tables.

        Args:
            ratings(pandas.DataFrame):
                The training ratings.
            mean(float or None):
                The global mean to use; computed from ``ratings`` if not given.
                Supplying it lets a search over shrinkage values compute it once.
        """
        if len(ratings) == 0:
            raise InsufficientData('cannot fit biases to an empty rating set')
        unknown = [a for a in self.axes if a not in ratings.columns]
        if unknown:
            raise ValueError('rating frame has no columns for axes {}'.format(unknown))

        timer = Stopwatch()
        if mean is None:
            mean = ratings['rating'].mean()
        _log.debug('[%s] fitting %s from %d ratings (mean %.3f)',
                   timer, self, len(ratings), mean)

        tables = []
        prior = pd.Series(0.0, index=ratings.index)
        for axis in self.axes:
            table = estimate_bias(ratings, axis, mean, prior, self.shrinkage)
            _log.debug('[%s] fit %d %s biases', timer, len(table), axis)
            tables.append(table)
            # new series each round, so earlier residuals stay untouched
            prior = prior + _lookup(ratings[axis], table)

        self.mean_ = mean
        self.tables_ = tuple(tables)
        if 'category' in ratings.columns:
            self.item_categories_ = ratings.groupby('item')['category'].first()
        else:
            self.item_categories_ = pd.Series(dtype=object)
        _log.debug('[%s] finished fitting %s', timer, self)
        return self

    def bias(self, axis):
        "Get a copy of the bias table for an axis."
        try:
            return self.tables_[self.axes.index(axis)].copy()
        except ValueError:
            raise KeyError(axis)

    def _with_categories(self, pairs):
        if 'category' in self.axes and 'category' not in pairs.columns:
            pairs = pairs.assign(category=pairs['item'].map(self.item_categories_))
        return pairs

    def unseen_counts(self, pairs):
        """
        Count the keys in ``pairs`` that the model has no bias for.

        Returns:
            pandas.Series: the number of rows in ``pairs`` whose key on each axis
            was not seen in training.
        """
        pairs = self._with_categories(pairs)
        counts = [(~pairs[t.name].isin(t.index)).sum() for t in self.tables_]
        return pd.Series(counts, index=pd.Index(self.axes, name='axis'), name='unseen')

    def predict(self, pairs, ratings=None):
        """
        Predict ratings.

        Keys that were not seen in training contribute 0 for their axis, so the
        prediction for a completely unknown rating is the global mean.

        Args:
            pairs(pandas.DataFrame):
                The rows to predict for, with a column for each axis (a missing
                ``category`` column is filled from the items' training categories).

        Returns:
            pandas.Series: the predictions, aligned with ``pairs``.
        """
        pairs = self._with_categories(pairs)
        preds = pd.Series(self.mean_, index=pairs.index, dtype='f8')
        for table in self.tables_:
            preds = preds + _lookup(pairs[table.name], table)

        unseen = self.unseen_counts(pairs)
        if unseen.any():
            _log.info('zero fallback for unseen keys: %s',
                      ', '.join('{} {}s'.format(n, a) for (a, n) in unseen.items() if n))

        preds.name = 'prediction'
        return preds

    def predict_for_user(self, user, items, ratings=None):
        items = pd.Index(items)
        pairs = pd.DataFrame({'user': user, 'item': np.asarray(items)})
        preds = self.predict(pairs)
        return pd.Series(preds.values, index=items)

    def __str__(self):
        return 'SequentialBias(axes={}, shrinkage={})'.format('/'.join(self.axes), self.shrinkage)
