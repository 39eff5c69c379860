"""
Corpus Dataset Management

Handles loading and validation of the document table (one row per document,
with an identifier, free text and a group label).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Any, Iterator, Union
import pandas as pd

from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """A single source row of the input table."""
    id: int
    text: str
    group_label: str


class CorpusDataset:
    """
    Container for a table of documents labelled by group.

    Parameters
    ----------
    df : pd.DataFrame
        Input dataframe with required columns
    id_column : str, default='id'
        Name of the document identifier column
    text_column : str, default='text'
        Name of the free text column
    group_column : str, default='group'
        Name of the group label column (e.g. profession)
    validate : bool, default=True
        Whether to validate input data on initialization
    """

    READERS = {
        '.csv': 'csv',
        '.tsv': 'tsv',
        '.txt': 'tsv',
        '.xlsx': 'excel',
        '.xls': 'excel',
    }

    def __init__(
        self,
        df: pd.DataFrame,
        id_column: str = 'id',
        text_column: str = 'text',
        group_column: str = 'group',
        validate: bool = True
    ):
        self.df = df.copy()
        self.id_column = id_column
        self.text_column = text_column
        self.group_column = group_column

        if validate:
            validation_report = self.validate_data()
            if not validation_report['valid']:
                raise InvalidInputError(f"Data validation failed: {validation_report['errors']}")
            for message in validation_report['warnings']:
                logger.warning(message)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        sheet_name: Optional[Union[str, int]] = None,
        id_column: str = 'id',
        text_column: str = 'text',
        group_column: str = 'group',
        validate: bool = True
    ) -> 'CorpusDataset':
        """
        Load a dataset from a CSV, TSV or Excel file.

        Parameters
        ----------
        path : str or Path
            Path to the table
        sheet_name : str or int, optional
            Sheet to read for Excel workbooks (first sheet by default)

        Returns
        -------
        CorpusDataset
            Loaded dataset
        """
        path = Path(path)
        kind = cls.READERS.get(path.suffix.lower())
        if kind is None:
            raise InvalidInputError(f"Unsupported table format: {path.suffix or path.name}")

        try:
            if kind == 'csv':
                df = pd.read_csv(path)
            elif kind == 'tsv':
                df = pd.read_csv(path, sep='\t')
            else:
                df = pd.read_excel(path, sheet_name=sheet_name if sheet_name is not None else 0)
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise InvalidInputError(f"Could not read {path}: {e}") from e

        logger.info(f"Loaded {len(df)} rows from {path}")

        return cls(df, id_column=id_column, text_column=text_column,
                   group_column=group_column, validate=validate)

    def validate_data(self) -> Dict[str, Any]:
        """
        Validates input data integrity.

        Returns
        -------
        dict
            Validation report with keys:
            - 'valid': bool
            - 'errors': list of error messages
            - 'warnings': list of warning messages
            - 'statistics': data summary stats
        """
        errors = []
        warnings = []
        stats = {}

        # Check required columns
        required_cols = [self.id_column, self.text_column, self.group_column]
        missing_cols = [col for col in required_cols if col not in self.df.columns]
        if missing_cols:
            errors.append(f"Missing required columns: {missing_cols}")
            return {'valid': False, 'errors': errors, 'warnings': warnings, 'statistics': stats}

        if len(self.df) == 0:
            errors.append("DataFrame is empty")
            return {'valid': False, 'errors': errors, 'warnings': warnings, 'statistics': stats}

        # Identifiers must be integers and unique
        ids = pd.to_numeric(self.df[self.id_column], errors='coerce')
        if ids.isna().any() or (ids % 1 != 0).any():
            errors.append(f"Column '{self.id_column}' must contain integer identifiers")
        elif ids.duplicated().any():
            n_dup = int(ids.duplicated().sum())
            errors.append(f"{n_dup} rows have duplicate identifiers")

        group_col = self.df[self.group_column]
        if group_col.isna().any():
            n_missing = int(group_col.isna().sum())
            errors.append(f"{n_missing} rows have missing group labels")

        text_col = self.df[self.text_column]
        empty_texts = text_col.isna() | (text_col.astype(str).str.strip() == '')
        if empty_texts.any():
            warnings.append(f"{int(empty_texts.sum())} rows have empty text")

        text_lengths = text_col.fillna('').astype(str).str.len()
        stats = {
            'n_documents': len(self.df),
            'n_groups': int(group_col.nunique()),
            'text_stats': {
                'avg_length': float(text_lengths.mean()),
                'min_length': int(text_lengths.min()),
                'max_length': int(text_lengths.max()),
                'non_empty_count': int((~empty_texts).sum())
            }
        }

        return {
            'valid': len(errors) == 0,
            'errors': errors,
            'warnings': warnings,
            'statistics': stats
        }

    def documents(self) -> Iterator[Document]:
        """Yield the table rows as Documents, in table order."""
        for row_id, text, group in zip(
            self.df[self.id_column], self.df[self.text_column], self.df[self.group_column]
        ):
            yield Document(
                id=int(row_id),
                text='' if pd.isna(text) else str(text),
                group_label=str(group)
            )

    def group_labels(self) -> List[str]:
        """Sorted unique group labels."""
        return sorted(self.df[self.group_column].astype(str).unique().tolist())

    def summary(self) -> pd.DataFrame:
        """Number of documents and characters per group."""
        df = pd.DataFrame({
            'group_label': self.df[self.group_column].astype(str),
            'n_chars': self.df[self.text_column].fillna('').astype(str).str.len()
        })
        summary = df.groupby('group_label').agg(
            n_documents=('n_chars', 'size'),
            n_chars=('n_chars', 'sum')
        )
        return summary.reset_index()

    def __len__(self) -> int:
        return len(self.df)
