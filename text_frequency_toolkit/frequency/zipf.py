"""
Zipf's Law

Rank-frequency tables and a log-log least-squares fit.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, Mapping
import numpy as np
import pandas as pd
from scipy.stats import linregress

from ..exceptions import InvalidInputError
from .engine import FrequencyEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZipfFit:
    """Fit of log10(count) = intercept + slope * log10(rank)."""
    slope: float
    intercept: float
    r_squared: float
    n_types: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'slope': self.slope,
            'intercept': self.intercept,
            'r_squared': self.r_squared,
            'n_types': self.n_types
        }


def zipf_table(counts: Mapping[str, int]) -> pd.DataFrame:
    """
    Rank-frequency table.

    Parameters
    ----------
    counts : mapping
        ``token -> count``

    Returns
    -------
    pd.DataFrame
        Columns: rank, token, count, frequency, log_rank, log_frequency.
        ``frequency`` is the share of all tokens.
    """
    ranked = FrequencyEngine.rank(counts)
    columns = ['rank', 'token', 'count', 'frequency', 'log_rank', 'log_frequency']
    if not ranked:
        return pd.DataFrame(columns=columns)

    tokens, values = zip(*ranked)
    values = np.asarray(values, dtype=float)
    ranks = np.arange(1, len(values) + 1)
    frequency = values / values.sum()

    return pd.DataFrame({
        'rank': ranks,
        'token': list(tokens),
        'count': values.astype(int),
        'frequency': frequency,
        'log_rank': np.log10(ranks),
        'log_frequency': np.log10(frequency)
    }, columns=columns)


def fit_zipf(counts: Mapping[str, int]) -> ZipfFit:
    """
    Least-squares fit of the log-log rank-frequency curve.

    A slope close to -1 indicates a Zipfian distribution.
    """
    table = zipf_table(counts)
    if len(table) < 2:
        raise InvalidInputError("Zipf fit needs at least 2 distinct tokens")

    result = linregress(table['log_rank'], np.log10(table['count']))
    fit = ZipfFit(
        slope=float(result.slope),
        intercept=float(result.intercept),
        r_squared=float(result.rvalue ** 2),
        n_types=len(table)
    )
    logger.info(f"Zipf fit over {fit.n_types} types: slope={fit.slope:.3f}, R^2={fit.r_squared:.3f}")
    return fit
