"""
Search for the shrinkage constant that minimizes prediction error.

Each candidate is fit on the training data and scored by RMSE on a separate
evaluation set.  Candidates are independent, so they can be evaluated in
worker processes; the result never depends on the order they finish in.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from tqdm.auto import tqdm
import numpy as np
import pandas as pd

from lenskit.util import Stopwatch
from lenskit.util.parallel import invoker

from .bias import SequentialBias, DEFAULT_AXES
from .errors import EmptyCandidateSet, InsufficientData
from .metrics import rmse

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShrinkageResult:
    "The outcome of evaluating one shrinkage constant."
    shrinkage: float
    score: float
    model: SequentialBias


@dataclass
class TuneContext:
    "The data shared by every candidate in a search."
    train_data: pd.DataFrame
    test_data: pd.DataFrame
    axes: Sequence[str]
    mean: float


def predict_and_score(algo, data):
    """
    Predict a rating frame with a fitted model and score the predictions.

    This is used both to score candidates during the search and to score the
    final model on validation data.  Predictions always exist (unseen keys fall
    back to 0 bias), so no rows are dropped.

    Returns:
        tuple: the predictions (a series aligned with ``data``) and their RMSE.
    """
    preds = algo.predict(data)
    return preds, rmse(data['rating'], preds)


def evaluate(algo, data):
    "Score a fitted model by its RMSE on a rating frame."
    _preds, score = predict_and_score(algo, data)
    return score


def shrinkage_grid(start, stop, step):
    """
    Make an evenly-spaced grid of shrinkage constants, including ``stop``.
    """
    if step <= 0:
        raise ValueError('grid step must be positive')
    n = int(np.floor((stop - start) / step + 1e-9)) + 1
    return [float(start + i * step) for i in range(max(n, 0))]


def _evaluate_point(ctx: TuneContext, shrinkage):
    algo = SequentialBias(ctx.axes, shrinkage)
    algo.fit(ctx.train_data, mean=ctx.mean)
    score = evaluate(algo, ctx.test_data)
    return ShrinkageResult(shrinkage, score, algo)


def _best(results):
    """
    Pick the lowest score, preferring earlier candidates on ties.  NaN scores
    (from NaN ratings in the evaluation data) never win.
    """
    keys = [(np.inf if np.isnan(r.score) else r.score, i) for (i, r) in enumerate(results)]
    _score, pos = min(keys)
    return results[pos]


class ShrinkageOptimizer:
    """
    Grid search over the shrinkage constant of a :class:`SequentialBias` model.

    Attributes:
        results_(list of ShrinkageResult):
            the result for each candidate, in candidate order.
        best_(ShrinkageResult):
            the selected result.
    """

    def __init__(self, axes=DEFAULT_AXES, candidates=(), n_jobs=1):
        """
        Args:
            axes(sequence of str): the bias axes to fit, in order.
            candidates(sequence of float): the shrinkage constants to try.
            n_jobs(int or None):
                the number of processes to evaluate candidates with.  ``None``
                uses LensKit's default process count.
        """
        self.axes = tuple(axes)
        self.candidates = list(candidates)
        self.n_jobs = n_jobs

    def optimize(self, train, evaluation):
        """
        Find the best shrinkage constant.

        Args:
            train(pandas.DataFrame):
                the ratings to fit models on.
            evaluation(pandas.DataFrame):
                the ratings to score models on.  These are never used for fitting.

        Returns:
            ShrinkageResult:
                the first candidate (in candidate order) with the lowest RMSE.
        """
        if not self.candidates:
            raise EmptyCandidateSet('no shrinkage candidates to search')
        if any(c < 0 for c in self.candidates):
            raise ValueError('shrinkage candidates must be non-negative')
        if len(train) == 0:
            raise InsufficientData('cannot search shrinkage without training data')

        timer = Stopwatch()
        mean = train['rating'].mean()
        _log.info('searching %d shrinkage values for %s (mean %.3f)',
                  len(self.candidates), '/'.join(self.axes), mean)
        ctx = TuneContext(train, evaluation, self.axes, mean)

        with invoker(ctx, _evaluate_point, self.n_jobs) as worker:
            results = []
            points = worker.map(self.candidates)
            for res in tqdm(points, total=len(self.candidates), leave=False):
                _log.info('shrinkage %.3f: RMSE=%.4f', res.shrinkage, res.score)
                results.append(res)

        self.results_ = results
        self.best_ = _best(results)
        _log.info('[%s] best shrinkage %.3f with RMSE %.4f',
                  timer, self.best_.shrinkage, self.best_.score)
        return self.best_

    def results_frame(self):
        "Get the search results as a data frame of shrinkage values and scores."
        return pd.DataFrame({
            'shrinkage': [r.shrinkage for r in self.results_],
            'RMSE': [r.score for r in self.results_],
        })


def optimize(train, evaluation, candidates, axes=DEFAULT_AXES, n_jobs=1):
    """
    Find the best shrinkage constant for a bias model.

    See :meth:`ShrinkageOptimizer.optimize`.
    """
    opt = ShrinkageOptimizer(axes, candidates, n_jobs)
    return opt.optimize(train, evaluation)
