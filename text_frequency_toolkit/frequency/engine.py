"""
Frequency Engine

Counting, ranking, stopword filtering and IPM (instances per million)
normalization of token streams.
"""

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Dict, List, Optional, Any, Iterable, Tuple, Union
import pandas as pd

from ..exceptions import InvalidInputError, DivisionByZeroError
from ..tokenization import TokenRecord

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 1_000_000
CORPUS_LABEL = '__corpus__'

TABLE_COLUMNS = ['group_label', 'token', 'count', 'group_total', 'ipm']

Counts = Mapping[str, int]
TokenLike = Union[str, TokenRecord]


def _token(item: TokenLike) -> str:
    if isinstance(item, TokenRecord):
        return item.token
    if isinstance(item, str):
        return item
    raise InvalidInputError(f"Expected a token string or TokenRecord, got {type(item).__name__}")


class FrequencyEngine:
    """
    Token frequency statistics.

    Parameters
    ----------
    scale : float, default=1_000_000
        Normalization constant for IPM values
    """

    def __init__(self, scale: float = DEFAULT_SCALE):
        if scale <= 0:
            raise ValueError(f"IPM scale must be positive, got {scale}")
        self.scale = scale

    @staticmethod
    def count(tokens: Iterable[TokenLike], group_by: bool = False) -> Dict[str, Any]:
        """
        Aggregate token occurrences.

        Parameters
        ----------
        tokens : iterable
            Token strings or TokenRecords
        group_by : bool, default=False
            Partition counts by group label (requires TokenRecords)

        Returns
        -------
        dict
            ``token -> count`` in first-seen order, or
            ``group_label -> {token -> count}`` when grouped
        """
        if not group_by:
            return dict(Counter(_token(t) for t in tokens))

        grouped: Dict[str, Counter] = {}
        for record in tokens:
            if not isinstance(record, TokenRecord):
                raise InvalidInputError("Grouped counting requires TokenRecords with a group label")
            grouped.setdefault(record.group_label, Counter())[record.token] += 1
        return {group: dict(counter) for group, counter in grouped.items()}

    @staticmethod
    def rank(counts: Union[Counts, Iterable[Tuple[str, int]]]) -> List[Tuple[str, int]]:
        """
        Order tokens by descending count.

        Ties keep first-seen order, so ranking an already ranked sequence
        returns it unchanged.
        """
        items = list(counts.items()) if isinstance(counts, Mapping) else list(counts)
        return sorted(items, key=lambda item: -item[1])

    @staticmethod
    def filter_stopwords(
        tokens: Iterable[TokenLike],
        stopwords: Any,
        keep: bool = False
    ) -> List[TokenLike]:
        """
        Remove (``keep=False``) or retain only (``keep=True``) stopwords.

        Parameters
        ----------
        tokens : iterable
            Token strings or TokenRecords
        stopwords : container of str
            StopwordSet or any object supporting ``in``
        keep : bool, default=False
            False for content analysis, True for stylometry

        Returns
        -------
        list
            Filtered tokens, same element type as the input
        """
        return [t for t in tokens if (_token(t) in stopwords) == keep]

    def normalize(
        self,
        counts: Mapping[str, Counts],
        totals: Optional[Mapping[str, int]] = None,
        scale: Optional[float] = None
    ) -> pd.DataFrame:
        """
        Convert grouped counts to instances per million.

        Parameters
        ----------
        counts : mapping
            ``group_label -> {token -> count}``
        totals : mapping, optional
            ``group_label -> total tokens``; defaults to the sum of each
            group's counts
        scale : float, optional
            Overrides the engine's scale constant

        Returns
        -------
        pd.DataFrame
            Columns: group_label, token, count, group_total, ipm. Groups are
            sorted; tokens within a group are ranked.
        """
        scale = self.scale if scale is None else scale
        rows = []

        for group in sorted(counts):
            group_counts = counts[group]
            if totals is None:
                total = sum(group_counts.values())
            else:
                total = totals.get(group, 0)
            if not total:
                raise DivisionByZeroError(f"Group '{group}' has no tokens; cannot normalize")

            for token, n in self.rank(group_counts):
                rows.append((group, token, int(n), int(total), n * scale / total))

        return pd.DataFrame(rows, columns=TABLE_COLUMNS)

    def frequency_table(
        self,
        records: Iterable[TokenRecord],
        stopwords: Optional[Any] = None,
        keep: bool = False
    ) -> pd.DataFrame:
        """
        Per-group frequency table with optional stopword filtering.

        Group totals are taken after filtering, so counts always sum to the
        group total. Groups left without tokens are dropped with a warning.
        """
        records = list(records)
        groups_before = {r.group_label for r in records}

        if stopwords is not None:
            records = self.filter_stopwords(records, stopwords, keep=keep)
            mode = 'keep' if keep else 'remove'
            logger.info(f"Stopword filter ({mode}) kept {len(records)} tokens")

        counts = self.count(records, group_by=True)

        for group in sorted(groups_before - set(counts)):
            logger.warning(f"Group '{group}' has no tokens after stopword filtering; excluded")

        table = self.normalize(counts)
        logger.info(f"Frequency table: {len(table)} rows across {len(counts)} groups")
        return table

    def corpus_table(self, records: Iterable[TokenLike]) -> pd.DataFrame:
        """Frequency table for the whole corpus as a single group."""
        counts = self.count(records)
        if not counts:
            raise DivisionByZeroError("Corpus has no tokens; cannot normalize")
        return self.normalize({CORPUS_LABEL: counts})

    def top_n(
        self,
        source: Union[pd.DataFrame, Counts],
        n: int = 20,
        group: Optional[str] = None
    ) -> List[Tuple[str, int]]:
        """
        Ranked top-N tokens for one group or the whole corpus.

        Parameters
        ----------
        source : pd.DataFrame or mapping
            A frequency table, or ``token -> count``
        n : int, default=20
            Cutoff
        group : str, optional
            Restrict to one group (frequency tables only)

        Returns
        -------
        list of (token, count)
        """
        if n < 0:
            raise ValueError(f"top-N cutoff must be non-negative, got {n}")

        if isinstance(source, pd.DataFrame):
            table = source
            if group is not None:
                table = table[table['group_label'] == group]
                if table.empty:
                    raise InvalidInputError(f"Unknown group: '{group}'")
            counts = table.groupby('token', sort=False)['count'].sum()
            counts = {token: int(c) for token, c in counts.items()}
        else:
            if group is not None:
                raise InvalidInputError("Group selection requires a frequency table")
            counts = source

        return self.rank(counts)[:n]

    def word_cloud_weights(self, counts: Counts, n: int = 100) -> Dict[str, float]:
        """
        Top-N token weights scaled to the most frequent token (weight 1.0).

        The result is the input a word-cloud renderer needs.
        """
        ranked = self.top_n(counts, n)
        if not ranked:
            return {}
        top_count = ranked[0][1]
        return {token: c / top_count for token, c in ranked}
