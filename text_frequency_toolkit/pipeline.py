"""
Analysis Pipeline

End-to-end run: documents -> tokens -> frequency tables -> sparse matrix ->
PCA projection. Every stage returns a new object; nothing is shared or
mutated between stages.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
import pandas as pd

from .dataset import CorpusDataset
from .tokenization import Tokenizer, TokenRecord
from .frequency import FrequencyEngine, StopwordSet, load_stopwords, ZipfFit, zipf_table, fit_zipf
from .projection import SparseMatrix, build_matrix, ProjectionEngine, ProjectionResult
from .utils.config import PipelineConfig

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Container for the outputs of one pipeline run."""

    n_tokens: int = 0
    frequencies: pd.DataFrame = field(default_factory=pd.DataFrame)
    top_tokens: List[Tuple[str, int]] = field(default_factory=list)
    zipf: pd.DataFrame = field(default_factory=pd.DataFrame)
    zipf_fit: Optional[ZipfFit] = None
    matrix: Optional[SparseMatrix] = None
    projection: Optional[ProjectionResult] = None

    def save(self, output_dir: Union[str, Path]) -> Dict[str, Path]:
        """
        Write every table as CSV into ``output_dir``.

        Returns
        -------
        dict
            Output name -> written path
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        tables = {
            'frequencies': self.frequencies,
            'top_tokens': pd.DataFrame(self.top_tokens, columns=['token', 'count']),
            'zipf': self.zipf,
        }
        if self.zipf_fit is not None:
            tables['zipf_fit'] = pd.DataFrame([self.zipf_fit.to_dict()])
        if self.matrix is not None:
            tables['matrix'] = self.matrix.to_coordinates()
        if self.projection is not None:
            tables['loadings'] = self.projection.loadings_frame().rename_axis('token').reset_index()
            tables['coordinates'] = self.projection.coordinates.reset_index()
            tables['explained_variance'] = self.projection.explained_variance()

        written = {}
        for name, table in tables.items():
            path = output_dir / f"{name}.csv"
            table.to_csv(path, index=False)
            written[name] = path

        logger.info(f"Saved {len(written)} tables to {output_dir}")
        return written


class AnalysisPipeline:
    """
    Configured text frequency and stylometry run.

    Parameters
    ----------
    config : PipelineConfig, optional
        Pipeline configuration (defaults when omitted)
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.config.validate()

        pattern = self.config.get('tokenizer.pattern')
        tokenizer_params = {'lowercase': self.config.get('tokenizer.lowercase', True)}
        if pattern:
            tokenizer_params['pattern'] = pattern

        self.tokenizer = Tokenizer(**tokenizer_params)
        self.engine = FrequencyEngine(scale=self.config.get('frequency.scale'))
        self.projector = ProjectionEngine(
            n_components=self.config.get('projection.n_components'),
            scale=self.config.get('projection.scale')
        )

    def load_dataset(self, path: Union[str, Path]) -> CorpusDataset:
        """Read the input table using the configured column names."""
        return CorpusDataset.from_file(
            path,
            sheet_name=self.config.get('dataset.sheet_name'),
            id_column=self.config.get('dataset.id_column'),
            text_column=self.config.get('dataset.text_column'),
            group_column=self.config.get('dataset.group_column')
        )

    def tokens(self, dataset: CorpusDataset) -> List[TokenRecord]:
        records = list(self.tokenizer.tokenize(dataset.documents()))
        logger.info(f"Tokenized {len(dataset)} documents into {len(records)} tokens")
        return records

    def stopwords(self) -> Optional[StopwordSet]:
        modes = {self.config.get('stopwords.mode'), self.config.get('projection.stopword_mode')}
        if modes == {'none'}:
            return None
        return load_stopwords(self.config.get('stopwords.source'))

    def frequencies(
        self,
        records: List[TokenRecord],
        stopwords: Optional[StopwordSet],
        mode: str
    ) -> pd.DataFrame:
        """Frequency table with the stopword filter for ``mode`` applied."""
        if mode == 'none' or stopwords is None:
            return self.engine.frequency_table(records)
        return self.engine.frequency_table(records, stopwords, keep=(mode == 'keep'))

    def project(
        self,
        dataset: CorpusDataset,
        records: List[TokenRecord],
        stopwords: Optional[StopwordSet]
    ) -> Tuple[SparseMatrix, ProjectionResult]:
        table = self.frequencies(records, stopwords, self.config.get('projection.stopword_mode'))
        matrix = build_matrix(
            table,
            value=self.config.get('projection.value'),
            expected_groups=dataset.group_labels()
        )
        return matrix, self.projector.project(matrix)

    def run(self, dataset: CorpusDataset) -> AnalysisResult:
        """
        Complete analysis.

        Steps:
        1. Tokenize documents
        2. Content frequency table (stopword mode from ``stopwords.mode``)
        3. Corpus-wide top-N and Zipf fit over all tokens
        4. Stylometry matrix (``projection.stopword_mode``) and PCA

        Parameters
        ----------
        dataset : CorpusDataset
            Input documents

        Returns
        -------
        AnalysisResult
            All tables of the run
        """
        records = self.tokens(dataset)
        stopwords = self.stopwords()

        frequencies = self.frequencies(records, stopwords, self.config.get('stopwords.mode'))
        top_tokens = self.engine.top_n(frequencies, self.config.get('frequency.top_n'))

        corpus_counts = self.engine.count(records)
        zipf = zipf_table(corpus_counts)
        zipf_fit = fit_zipf(corpus_counts) if len(corpus_counts) >= 2 else None

        matrix, projection = self.project(dataset, records, stopwords)

        return AnalysisResult(
            n_tokens=len(records),
            frequencies=frequencies,
            top_tokens=top_tokens,
            zipf=zipf,
            zipf_fit=zipf_fit,
            matrix=matrix,
            projection=projection
        )
