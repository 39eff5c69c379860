"""
Long/wide conversion of frequency tables.
"""

import logging
import numpy as np
import pandas as pd

from ..exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def to_wide(table: pd.DataFrame, value: str = 'ipm') -> pd.DataFrame:
    """
    Pivot a long frequency table to one row per group and one column per token.

    Rows are sorted by group label, columns follow first-seen token order and
    missing cells are 0.
    """
    required = {'group_label', 'token', value}
    missing = required - set(table.columns)
    if missing:
        raise InvalidInputError(f"Frequency table is missing columns: {sorted(missing)}")

    tokens = pd.unique(table['token'])
    wide = table.pivot_table(
        index='group_label', columns='token', values=value, aggfunc='sum', fill_value=0
    )
    wide = wide.reindex(columns=tokens, fill_value=0).sort_index()
    wide.columns.name = None
    return wide


def to_long(wide: pd.DataFrame, value: str = 'ipm') -> pd.DataFrame:
    """
    Back from a wide table to ``group_label, token, <value>`` rows.

    Zero cells are dropped, matching the sparse long form. Cells are read by
    position, so tokens such as "count" or "ipm" never collide with the
    output column names.
    """
    values = wide.to_numpy()
    rows, cols = np.nonzero(values)
    long = pd.DataFrame({
        'group_label': wide.index.to_numpy()[rows],
        'token': wide.columns.to_numpy()[cols],
        value: values[rows, cols]
    }, columns=['group_label', 'token', value])
    return long.sort_values('group_label', kind='stable').reset_index(drop=True)
