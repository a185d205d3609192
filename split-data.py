"""
Split rating data into training, tuning, and validation sets.

Usage:
    split-data.py [options] --movielens NAME

Options:
    --movielens
        Split MovieLens rating data.
    -s SUFFIX, --split-suffix=SUFFIX
        The split suffix [default: split].
    --tune-frac=F
        Hold out fraction F of the ratings for tuning [default: 0.1].
    --val-frac=F
        Hold out fraction F of the ratings for validation [default: 0.1].
    NAME
        The name of the data set to split.
"""
import logging
from pathlib import Path
from docopt import docopt

import seedbank

from biasrec.data import load_movielens, split_ratings

_log = logging.getLogger('split-data')
_data_dir = Path('data')


def main(args):
    logging.basicConfig(level=logging.INFO)
    seedbank.init_file('params.yaml')

    if args['--movielens']:
        name = args['NAME']
        ratings = load_movielens(_data_dir / name)
    else:
        raise RuntimeError('no split source specified')

    sfx = args['--split-suffix']
    split = _data_dir / f'{name}-{sfx}'
    _log.info('saving to %s', split)
    split.mkdir(exist_ok=True)

    train, tune, val = split_ratings(ratings, float(args['--tune-frac']), float(args['--val-frac']))
    for part, data in [('train', train), ('tune', tune), ('validation', val)]:
        _log.info('writing %s data (%d ratings)', part, len(data))
        data.to_parquet(split / f'{part}.parquet', index=False)


if __name__ == '__main__':
    args = docopt(__doc__)
    main(args)
