"""Projection package for the Text Frequency Toolkit."""

from .matrix import SparseMatrix, build_matrix
from .pca import ProjectionEngine, ProjectionResult, PrincipalComponent

__all__ = ['SparseMatrix', 'build_matrix', 'ProjectionEngine', 'ProjectionResult', 'PrincipalComponent']
