#!/usr/bin/env python3
"""
Fit a bias algorithm and score it on the validation data.

Usage:
    run-algo.py [options] ALGO

Options:
    -d DIR, --data=DIR
        Use split data in DIR [default: data/ml-latest-small-split].
    -p PFX, --prefix=PREFIX
        Prefix output dirs with PFX.
    -v, --verbose
        Use verbose logging.
    --params FILE
        Load parameters from FILE.
"""
import json
import logging
from pathlib import Path
import pandas as pd
from docopt import docopt

from lenskit.util import Stopwatch

from biasrec.algo_specs import algorithms
from biasrec.algorithms.tuning import predict_and_score

_log = logging.getLogger('run-algo')
pred_base = Path('preds')


def run_algo(name, algo, pfx, train, test):
    _log.info('training %s', algo)
    timer = Stopwatch()
    algo.fit(train)
    _log.info('[%s] trained %s', timer, name)

    preds, err = predict_and_score(algo, test)
    _log.info('finished with validation RMSE %4f', err)

    unseen = algo.unseen_counts(test)
    for axis, n in unseen.items():
        _log.info('%d of %d validation ratings have unseen %s', n, len(test), axis)

    dname = f'{pfx}-{name}' if pfx else name
    preds = test.assign(prediction=preds)
    pred_dir = pred_base / dname
    pred_dir.mkdir(parents=True, exist_ok=True)
    preds.to_parquet(pred_dir / 'validation-preds.parquet', index=False)
    return err


def main():
    opts = docopt(__doc__)
    # initialize logging
    level = logging.DEBUG if opts['--verbose'] else logging.INFO
    logging.basicConfig(level=level)
    # turn off numba debug, it's noisy
    logging.getLogger('numba').setLevel(logging.INFO)

    data = Path(opts['--data'])

    algo_name = opts['ALGO']
    _log.info('using algorithm %s', algo_name)
    algo_mod = algorithms[algo_name]
    pfn = opts.get('--params', None)
    if pfn:
        _log.info('using parameters from %s', pfn)
        params = json.loads(Path(pfn).read_text())
        algo = algo_mod.from_params(**params)
    else:
        algo = algo_mod.default()

    train = pd.read_parquet(data / 'train.parquet')
    test = pd.read_parquet(data / 'validation.parquet')
    run_algo(algo_name, algo, opts['--prefix'], train, test)


if __name__ == '__main__':
    main()
