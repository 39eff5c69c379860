"""
Projection Engine

Principal component analysis of a group x token matrix, used for the
stylometry view (groups placed by their function-word profiles).
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any
import numpy as np
import pandas as pd
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

from ..exceptions import DegenerateMatrixError
from .matrix import SparseMatrix

logger = logging.getLogger(__name__)

VARIANCE_TOLERANCE = 1e-12


@dataclass(frozen=True)
class PrincipalComponent:
    """One component: token loadings and its share of total variance."""
    index: int
    loadings: pd.Series
    explained_variance_ratio: float

    @property
    def name(self) -> str:
        return f"PC{self.index + 1}"

    def top_loadings(self, n: int = 10) -> pd.Series:
        """Tokens with the largest absolute loadings, signed values kept."""
        order = self.loadings.abs().sort_values(ascending=False, kind='stable').index[:n]
        return self.loadings.loc[order]


@dataclass(frozen=True)
class ProjectionResult:
    """Components ordered by explained variance plus per-group coordinates."""
    components: List[PrincipalComponent] = field(default_factory=list)
    coordinates: pd.DataFrame = field(default_factory=pd.DataFrame)
    scaled: bool = False

    def loadings_frame(self) -> pd.DataFrame:
        """Tokens x components loadings table."""
        return pd.DataFrame({c.name: c.loadings for c in self.components})

    def explained_variance(self) -> pd.DataFrame:
        return pd.DataFrame({
            'component': [c.name for c in self.components],
            'explained_variance_ratio': [c.explained_variance_ratio for c in self.components]
        })

    def to_dict(self) -> Dict[str, Any]:
        return {
            'scaled': self.scaled,
            'explained_variance_ratio': {c.name: c.explained_variance_ratio for c in self.components},
            'coordinates': self.coordinates.to_dict(orient='index')
        }


class ProjectionEngine:
    """
    PCA over the rows of a SparseMatrix.

    Parameters
    ----------
    n_components : int, default=2
        Number of leading components to keep
    scale : bool, default=False
        Scale columns to unit variance after centering
    """

    def __init__(self, n_components: int = 2, scale: bool = False):
        if n_components < 1:
            raise ValueError(f"n_components must be at least 1, got {n_components}")
        self.n_components = n_components
        self.scale = scale

    def project(self, matrix: SparseMatrix) -> ProjectionResult:
        """
        Compute the leading components and project each group onto them.

        Loadings and coordinates come from a single decomposition, so their
        signs agree.

        Parameters
        ----------
        matrix : SparseMatrix
            Group x token matrix

        Returns
        -------
        ProjectionResult
            Components and group coordinates
        """
        X = matrix.to_array()
        n_groups = X.shape[0]
        if n_groups < 2:
            raise DegenerateMatrixError(f"PCA needs at least 2 groups, got {n_groups}")

        varying = X.var(axis=0) > VARIANCE_TOLERANCE
        n_varying = int(varying.sum())
        if n_varying < 2:
            raise DegenerateMatrixError(
                f"PCA needs at least 2 columns with non-zero variance, got {n_varying}"
            )

        k = min(self.n_components, n_groups - 1, n_varying)
        if k < self.n_components:
            logger.warning(f"Requested {self.n_components} components; only {k} available")

        X_varying = StandardScaler(with_mean=True, with_std=self.scale).fit_transform(X[:, varying])

        pca = PCA(n_components=k, svd_solver='full')
        scores = pca.fit_transform(X_varying)

        tokens = np.asarray(matrix.columns, dtype=object)
        components = []
        for i in range(k):
            loadings = pd.Series(0.0, index=tokens)
            loadings.iloc[np.flatnonzero(varying)] = pca.components_[i]
            components.append(PrincipalComponent(
                index=i,
                loadings=loadings,
                explained_variance_ratio=float(pca.explained_variance_ratio_[i])
            ))

        coordinates = pd.DataFrame(
            scores, index=matrix.rows, columns=[c.name for c in components]
        )
        coordinates.index.name = 'group_label'

        logger.info(
            f"Projected {n_groups} groups onto {k} components "
            f"({pca.explained_variance_ratio_.sum():.2%} of variance)"
        )
        return ProjectionResult(components=components, coordinates=coordinates, scaled=self.scale)
