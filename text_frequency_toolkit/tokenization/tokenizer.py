"""
Word Tokenizer

Splits document text into lower-cased word tokens, one record per occurrence.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Any
import pandas as pd

from ..exceptions import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = r"[^\W_]+(?:['\u2019][^\W_]+)*"

REQUIRED_FIELDS = ('id', 'text', 'group_label')


@dataclass(frozen=True)
class TokenRecord:
    """One token occurrence in a document."""
    document_id: int
    group_label: str
    token: str


class Tokenizer:
    """
    Regex word tokenizer.

    Parameters
    ----------
    lowercase : bool, default=True
        Case-normalize tokens
    pattern : str, optional
        Regular expression matching a single word. Everything it does not
        match is treated as a delimiter and discarded.
    """

    def __init__(self, lowercase: bool = True, pattern: str = DEFAULT_PATTERN):
        self.lowercase = lowercase
        self.pattern = pattern
        self._regex = re.compile(pattern)

    def tokenize_text(self, text: str) -> List[str]:
        """Split a single string into word tokens."""
        if not text:
            return []
        if self.lowercase:
            text = text.lower()
        return [match for match in self._regex.findall(text) if match]

    def tokenize(self, documents: Iterable[Any]) -> Iterator[TokenRecord]:
        """
        Lazily tokenize a sequence of documents.

        Parameters
        ----------
        documents : iterable
            Documents, or mappings / objects exposing ``id``, ``text`` and
            ``group_label``

        Yields
        ------
        TokenRecord
            One record per token occurrence, in document order
        """
        for position, document in enumerate(documents):
            doc_id, text, group_label = self._fields(document, position)
            for token in self.tokenize_text(text):
                yield TokenRecord(document_id=doc_id, group_label=group_label, token=token)

    @staticmethod
    def to_frame(records: Iterable[TokenRecord]) -> pd.DataFrame:
        """Long table with one token occurrence per row."""
        rows = [(r.document_id, r.group_label, r.token) for r in records]
        return pd.DataFrame(rows, columns=['document_id', 'group_label', 'token'])

    @staticmethod
    def _fields(document: Any, position: int):
        if isinstance(document, Mapping):
            missing = [f for f in REQUIRED_FIELDS if f not in document]
            get = document.get
        else:
            missing = [f for f in REQUIRED_FIELDS if not hasattr(document, f)]
            get = lambda name: getattr(document, name)

        if missing:
            raise InvalidInputError(f"Document at position {position} is missing fields: {missing}")

        text = get('text')
        if text is None:
            text = ''
        elif not isinstance(text, str):
            raise InvalidInputError(
                f"Document at position {position} has non-string text: {type(text).__name__}"
            )

        return get('id'), text, str(get('group_label'))
