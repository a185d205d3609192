"""
Rating record representation.

Ratings are passed around as data frames with LensKit's column names
(``user``, ``item``, ``rating``) plus a ``category`` column holding the
item's category label.  The label may be composite (e.g. a genre list
``Action|Comedy``); it is treated as a single opaque key.
"""

from typing import Any, NamedTuple
import pandas as pd

RATING_COLUMNS = ('user', 'item', 'category', 'rating')


class RatingRecord(NamedTuple):
    "A single rating."
    user: Any
    item: Any
    category: Any
    rating: float


def as_ratings(records):
    """
    Convert rating records to a rating frame.

    Args:
        records:
            A data frame with (at least) the rating columns, or an iterable
            of :class:`RatingRecord` objects or ``(user, item, category, rating)``
            tuples.

    Returns:
        pandas.DataFrame:
            a frame with the columns in :data:`RATING_COLUMNS`, in the original
            row order.  Frames are returned as-is.
    """
    if isinstance(records, pd.DataFrame):
        missing = [c for c in RATING_COLUMNS if c not in records.columns]
        if missing:
            raise KeyError('rating frame missing columns {}'.format(missing))
        return records

    frame = pd.DataFrame.from_records(list(records), columns=list(RATING_COLUMNS))
    frame['rating'] = frame['rating'].astype('f8')
    return frame
