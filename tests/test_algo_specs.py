from pytest import mark

from biasrec.algo_specs import algorithms
from biasrec.algorithms.bias import SequentialBias
from biasrec.algorithms.tuning import shrinkage_grid


@mark.parametrize('name', sorted(algorithms))
def test_spec_builds(name, train):
    spec = algorithms[name]
    algo = spec.default()
    assert isinstance(algo, SequentialBias)
    assert algo.axes == spec.axes
    algo.fit(train)
    assert len(algo.tables_) == len(spec.axes)


@mark.parametrize('name', sorted(algorithms))
def test_spec_from_params(name):
    spec = algorithms[name]
    # saved parameter files also carry the score
    algo = spec.from_params(shrinkage=2.5, RMSE=0.9)
    assert algo.shrinkage == 2.5
    assert algo.axes == spec.axes


@mark.parametrize('name', sorted(algorithms))
def test_spec_search_space(name):
    spec = algorithms[name]
    grid = shrinkage_grid(**spec.grid)
    assert grid[0] == spec.grid['start']
    assert all(g >= 0 for g in grid)
    assert [n for (n, _d) in spec.space] == ['shrinkage']


def test_default_chain():
    assert algorithms['BIAS'].axes == ('item', 'user', 'category')


@mark.parametrize('name', sorted(algorithms))
def test_spec_interface(name):
    spec = algorithms[name]
    public = {n for n in vars(spec) if not n.startswith('_')}
    assert public - {'loguniform', 'SequentialBias'} == {'axes', 'grid', 'space', 'default', 'from_params'}
