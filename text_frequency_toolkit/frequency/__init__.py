"""Frequency package for the Text Frequency Toolkit."""

from .engine import FrequencyEngine, DEFAULT_SCALE, CORPUS_LABEL
from .stopwords import StopwordSet, load_stopwords
from .zipf import ZipfFit, zipf_table, fit_zipf
from .reshape import to_wide, to_long

__all__ = [
    'FrequencyEngine', 'DEFAULT_SCALE', 'CORPUS_LABEL',
    'StopwordSet', 'load_stopwords',
    'ZipfFit', 'zipf_table', 'fit_zipf',
    'to_wide', 'to_long'
]
