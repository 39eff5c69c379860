import logging

import numpy as np
import pandas as pd
import pytest

from text_frequency_toolkit import DegenerateMatrixError, InvalidInputError, ProjectionEngine, build_matrix


def _table(rows):
    return pd.DataFrame(rows, columns=['group_label', 'token', 'ipm'])


@pytest.fixture
def style_table():
    return _table([
        ('physicist', 'the', 50.0), ('physicist', 'of', 30.0), ('physicist', 'we', 20.0),
        ('chemist', 'the', 40.0), ('chemist', 'of', 10.0), ('chemist', 'we', 50.0),
        ('biologist', 'the', 60.0), ('biologist', 'of', 35.0), ('biologist', 'and', 5.0),
    ])


def test_matrix_ordering_is_deterministic(style_table):
    matrix = build_matrix(style_table)
    assert matrix.rows == ['biologist', 'chemist', 'physicist']
    assert matrix.columns == ['the', 'of', 'we', 'and']
    assert matrix.shape == (3, 4)

    dense = matrix.to_frame()
    assert dense.loc['biologist', 'we'] == 0
    assert dense.loc['chemist', 'we'] == 50.0


def test_matrix_coordinate_export(style_table):
    coords = build_matrix(style_table).to_coordinates()
    assert list(coords.columns) == ['group_label', 'token', 'ipm']
    assert len(coords) == len(style_table)
    assert coords.iloc[0].tolist() == ['biologist', 'the', 60.0]


def test_matrix_reports_missing_groups(style_table, caplog):
    with caplog.at_level(logging.WARNING):
        matrix = build_matrix(style_table, expected_groups=['biologist', 'chemist', 'physicist', 'poet'])
    assert 'poet' not in matrix.rows
    assert "Group 'poet'" in caplog.text


def test_matrix_requires_value_column(style_table):
    with pytest.raises(InvalidInputError):
        build_matrix(style_table, value='count')


def test_identical_rows_are_degenerate():
    matrix = build_matrix(_table([
        ('G1', 'x', 10.0), ('G1', 'y', 10.0),
        ('G2', 'x', 10.0), ('G2', 'y', 10.0),
    ]))
    with pytest.raises(DegenerateMatrixError):
        ProjectionEngine().project(matrix)


def test_single_group_is_degenerate():
    matrix = build_matrix(_table([('G1', 'x', 1.0), ('G1', 'y', 2.0)]))
    with pytest.raises(DegenerateMatrixError):
        ProjectionEngine().project(matrix)


def test_one_varying_column_is_degenerate():
    matrix = build_matrix(_table([
        ('G1', 'x', 1.0), ('G1', 'y', 5.0),
        ('G2', 'x', 2.0), ('G2', 'y', 5.0),
    ]))
    with pytest.raises(DegenerateMatrixError):
        ProjectionEngine().project(matrix)


def test_projection_components_and_coordinates(style_table):
    matrix = build_matrix(style_table)
    result = ProjectionEngine(n_components=2).project(matrix)

    ratios = [c.explained_variance_ratio for c in result.components]
    assert ratios == sorted(ratios, reverse=True)
    assert sum(ratios) == pytest.approx(1.0)
    assert result.coordinates.shape == (3, 2)
    assert result.coordinates.index.tolist() == matrix.rows

    # Coordinates must be the centred rows projected on the reported loadings
    X = matrix.to_array()
    centred = X - X.mean(axis=0)
    loadings = result.loadings_frame().loc[matrix.columns].to_numpy()
    assert np.allclose(centred @ loadings, result.coordinates.to_numpy())


def test_components_are_orthonormal(style_table):
    result = ProjectionEngine(n_components=2).project(build_matrix(style_table))
    L = result.loadings_frame().to_numpy()
    assert np.allclose(L.T @ L, np.eye(2))


def test_component_count_is_clipped(style_table, caplog):
    with caplog.at_level(logging.WARNING):
        result = ProjectionEngine(n_components=5).project(build_matrix(style_table))
    assert len(result.components) == 2
    assert 'only 2 available' in caplog.text


def test_scaled_projection(style_table):
    result = ProjectionEngine(n_components=1, scale=True).project(build_matrix(style_table))
    assert result.scaled
    assert result.explained_variance()['component'].tolist() == ['PC1']
    top = result.components[0].top_loadings(2)
    assert len(top) == 2
    assert top.abs().iloc[0] >= top.abs().iloc[1]


def test_invalid_component_count():
    with pytest.raises(ValueError):
        ProjectionEngine(n_components=0)
