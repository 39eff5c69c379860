"""
Sparse Group x Token Matrix

Coordinate-list matrix built from a long frequency table with deterministic
row (sorted group labels) and column (first-seen token) ordering.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Iterable
import numpy as np
import pandas as pd
from scipy import sparse

from ..exceptions import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SparseMatrix:
    """Group x token values with implicit zeros."""
    rows: List[str]
    columns: List[str]
    data: sparse.coo_matrix
    value: str = 'ipm'

    @property
    def shape(self):
        return self.data.shape

    def to_array(self) -> np.ndarray:
        return self.data.toarray()

    def to_frame(self) -> pd.DataFrame:
        """Dense wide table (groups x tokens)."""
        df = pd.DataFrame(self.to_array(), index=self.rows, columns=self.columns)
        df.index.name = 'group_label'
        return df

    def to_coordinates(self) -> pd.DataFrame:
        """Export the stored cells as ``group_label, token, <value>`` rows."""
        coo = self.data
        order = np.lexsort((coo.col, coo.row))
        return pd.DataFrame({
            'group_label': [self.rows[i] for i in coo.row[order]],
            'token': [self.columns[j] for j in coo.col[order]],
            self.value: coo.data[order]
        })


def build_matrix(
    table: pd.DataFrame,
    value: str = 'ipm',
    expected_groups: Optional[Iterable[str]] = None
) -> SparseMatrix:
    """
    Cast a long frequency table to a sparse matrix.

    Parameters
    ----------
    table : pd.DataFrame
        Frequency table with group_label, token and the value column
    value : str, default='ipm'
        Column holding cell values ('ipm' or 'count')
    expected_groups : iterable of str, optional
        Groups present in the input data; any without rows in ``table`` are
        reported and excluded

    Returns
    -------
    SparseMatrix
        Matrix with sorted rows and first-seen column order
    """
    required = {'group_label', 'token', value}
    missing = required - set(table.columns)
    if missing:
        raise InvalidInputError(f"Frequency table is missing columns: {sorted(missing)}")

    rows = sorted(table['group_label'].astype(str).unique().tolist())
    columns = pd.unique(table['token']).tolist()

    if expected_groups is not None:
        for group in sorted(set(expected_groups) - set(rows)):
            logger.warning(f"Group '{group}' has no tokens; excluded from matrix")

    cells = table.groupby(['group_label', 'token'], sort=False)[value].sum()
    row_index = {g: i for i, g in enumerate(rows)}
    col_index = {t: j for j, t in enumerate(columns)}

    row_ids = np.array([row_index[str(g)] for g, _ in cells.index], dtype=int)
    col_ids = np.array([col_index[t] for _, t in cells.index], dtype=int)
    data = sparse.coo_matrix(
        (cells.to_numpy(dtype=float), (row_ids, col_ids)),
        shape=(len(rows), len(columns))
    )

    logger.info(f"Built {len(rows)} x {len(columns)} matrix with {data.nnz} stored cells")
    return SparseMatrix(rows=rows, columns=columns, data=data, value=value)
