"""
Text Frequency Toolkit

Tokenization, word frequency statistics (IPM, Zipf's law, stopwords) and a
PCA-based stylometry view over a table of documents labelled by group.
"""

__version__ = "1.0.0"

from .exceptions import (
    TextFrequencyError,
    InvalidInputError,
    DivisionByZeroError,
    DegenerateMatrixError,
)
from .dataset import CorpusDataset, Document
from .tokenization import Tokenizer, TokenRecord
from .frequency import (
    FrequencyEngine,
    StopwordSet,
    load_stopwords,
    ZipfFit,
    zipf_table,
    fit_zipf,
    to_wide,
    to_long,
)
from .projection import SparseMatrix, build_matrix, ProjectionEngine, ProjectionResult, PrincipalComponent
from .pipeline import AnalysisPipeline, AnalysisResult
from .utils.config import PipelineConfig

__all__ = [
    # Core classes
    'CorpusDataset',
    'Document',
    'Tokenizer',
    'TokenRecord',
    'FrequencyEngine',
    'StopwordSet',
    'load_stopwords',
    'ZipfFit',
    'zipf_table',
    'fit_zipf',
    'to_wide',
    'to_long',
    'SparseMatrix',
    'build_matrix',
    'ProjectionEngine',
    'ProjectionResult',
    'PrincipalComponent',
    'AnalysisPipeline',
    'AnalysisResult',
    'PipelineConfig',
    # Exceptions
    'TextFrequencyError',
    'InvalidInputError',
    'DivisionByZeroError',
    'DegenerateMatrixError',
    # Version
    '__version__'
]
