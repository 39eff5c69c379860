"""
Stopword Sets

Immutable stopword collections loaded from a bundled language list or a
plain-text word list.
"""

import logging
from pathlib import Path
from typing import Iterable, Union
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from ..exceptions import InvalidInputError

logger = logging.getLogger(__name__)

LANGUAGES = {
    'english': ENGLISH_STOP_WORDS,
}


class StopwordSet:
    """
    Fixed set of stopwords supporting membership tests only.

    Parameters
    ----------
    words : iterable of str
        Stopwords (lower-cased on construction)
    source : str, default='custom'
        Where the words came from, for reporting
    """

    def __init__(self, words: Iterable[str], source: str = 'custom'):
        self._words = frozenset(w.strip().lower() for w in words if w and w.strip())
        self.source = source

    @classmethod
    def from_words(cls, words: Iterable[str], source: str = 'custom') -> 'StopwordSet':
        return cls(words, source=source)

    @classmethod
    def from_language(cls, language: str = 'english') -> 'StopwordSet':
        """Bundled stopword list for a language."""
        key = language.lower()
        if key not in LANGUAGES:
            raise InvalidInputError(
                f"No bundled stopword list for '{language}'. Available: {sorted(LANGUAGES)}"
            )
        return cls(LANGUAGES[key], source=key)

    @classmethod
    def from_file(cls, path: Union[str, Path], encoding: str = 'utf-8') -> 'StopwordSet':
        """
        Load a stopword list with one word per line.

        Blank lines and lines starting with '#' are skipped. The file must
        decode cleanly; garbled bytes are rejected rather than passed through.

        Parameters
        ----------
        path : str or Path
            Word list file
        encoding : str, default='utf-8'
            File encoding

        Returns
        -------
        StopwordSet
            Loaded stopwords
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding=encoding, errors='strict') as f:
                lines = f.read().splitlines()
        except UnicodeDecodeError as e:
            raise InvalidInputError(f"Stopword file {path} is not valid {encoding}: {e}") from e
        except OSError as e:
            raise InvalidInputError(f"Could not read stopword file {path}: {e}") from e

        words = [line for line in lines if line.strip() and not line.lstrip().startswith('#')]
        stopwords = cls(words, source=str(path))
        logger.info(f"Loaded {len(stopwords)} stopwords from {path}")
        return stopwords

    def __contains__(self, token: object) -> bool:
        return token in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self):
        return iter(sorted(self._words))

    def __repr__(self) -> str:
        return f"StopwordSet(source={self.source!r}, size={len(self)})"


def load_stopwords(source: Union[str, Path]) -> StopwordSet:
    """
    Resolve a stopword source: a bundled language name or a file path.
    """
    if isinstance(source, str) and source.lower() in LANGUAGES:
        return StopwordSet.from_language(source)
    path = Path(source)
    if not path.exists():
        raise InvalidInputError(
            f"Stopword source '{source}' is neither a bundled language nor an existing file"
        )
    return StopwordSet.from_file(path)
