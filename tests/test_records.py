import pandas as pd

from pytest import raises

from biasrec.algorithms.records import RatingRecord, as_ratings, RATING_COLUMNS


def test_records_to_frame():
    frame = as_ratings([
        RatingRecord('u1', 'i1', 'Drama', 4),
        ('u2', 'i1', 'Drama', 3.5),
    ])
    assert list(frame.columns) == list(RATING_COLUMNS)
    assert len(frame) == 2
    assert list(frame['user']) == ['u1', 'u2']
    assert frame['rating'].dtype == 'f8'
    assert frame['rating'].iloc[0] == 4.0


def test_frame_passthrough(train):
    assert as_ratings(train) is train


def test_frame_missing_column(train):
    with raises(KeyError):
        as_ratings(train.drop(columns=['category']))


def test_record_is_immutable():
    rec = RatingRecord('u1', 'i1', 'Drama', 4.0)
    with raises(AttributeError):
        rec.rating = 3.0


def test_composite_category_is_one_key():
    frame = as_ratings([('u1', 'i1', 'Action|Comedy', 4.0)])
    assert frame['category'].iloc[0] == 'Action|Comedy'
