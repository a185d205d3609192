#!/usr/bin/env python3
"""
Tune the shrinkage constant for a bias algorithm.

Usage:
    tune-algo.py [options] ALGO DIR

Options:
    -v, --verbose
        Increase logging verbosity.
    -r FILE, --record=FILE
        Record individual points to FILE.
    -o FILE
        Save parameters to FILE.
    -j N, --procs N
        Evaluate candidates with N processes [default: 1].
    --start=X
        Start the shrinkage grid at X.
    --stop=X
        End the shrinkage grid at X.
    --step=X
        Space the shrinkage grid by X.
    -n N, --sample=N
        Test N randomly-sampled points instead of a grid.
    --points-only
        Print the points that would be used, without testing.
    ALGO
        The algorithm to tune.
    DIR
        The split data directory
"""

import sys
from pathlib import Path
import logging
import json

from docopt import docopt
import pandas as pd

import seedbank

from biasrec import algo_specs
from biasrec.algorithms.tuning import ShrinkageOptimizer, shrinkage_grid

_log = logging.getLogger('tune-algo')


def sample(space, state):
    "Sample a single point from a search space."
    return {
        name: dist.rvs(random_state=state)
        for (name, dist) in space
    }


def candidates(algo_mod, args):
    "Get the shrinkage candidates to search."
    if args['--sample']:
        state = seedbank.numpy_random_state()
        npts = int(args['--sample'])
        _log.info('sampling %d points', npts)
        return [float(sample(algo_mod.space, state)['shrinkage']) for i in range(npts)]

    grid = dict(algo_mod.grid)
    for key in ['start', 'stop', 'step']:
        if args[f'--{key}']:
            grid[key] = float(args[f'--{key}'])
    _log.info('searching grid %s', grid)
    return shrinkage_grid(**grid)


def main(args):
    level = logging.DEBUG if args['--verbose'] else logging.INFO
    logging.basicConfig(level=level, stream=sys.stderr)
    logging.getLogger('numba').setLevel(logging.INFO)

    seedbank.init_file('params.yaml')

    algo_name = args['ALGO']
    _log.info('loading algorithm %s', algo_name)
    algo_mod = algo_specs.algorithms[algo_name]

    points = candidates(algo_mod, args)
    if args['--points-only']:
        for i, point in enumerate(points):
            print(f'point {i}: shrinkage={point}')
        return

    data = Path(args['DIR'])
    _log.info('loading data from %s', data)
    train_data = pd.read_parquet(data / 'train.parquet')
    tune_data = pd.read_parquet(data / 'tune.parquet')

    n_jobs = int(args['--procs'])
    opt = ShrinkageOptimizer(algo_mod.axes, points, n_jobs)
    best = opt.optimize(train_data, tune_data)
    _log.info('finished with RMSE %.4f at shrinkage %.3f', best.score, best.shrinkage)

    record_fn = args['--record']
    if record_fn:
        _log.info('saving %d points to %s', len(opt.results_), record_fn)
        opt.results_frame().to_csv(record_fn, index=False)

    fn = args.get('-o', None)
    if fn:
        _log.info('saving params to %s', fn)
        Path(fn).write_text(json.dumps({'shrinkage': best.shrinkage, 'RMSE': best.score}))


if __name__ == '__main__':
    args = docopt(__doc__)
    main(args)
