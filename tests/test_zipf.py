import pytest

from text_frequency_toolkit import InvalidInputError, fit_zipf, zipf_table


def test_zipf_table_columns_and_ranks():
    table = zipf_table({'b': 4, 'a': 8, 'c': 2})
    assert table['token'].tolist() == ['a', 'b', 'c']
    assert table['rank'].tolist() == [1, 2, 3]
    assert table['frequency'].sum() == pytest.approx(1.0)
    assert table['log_rank'].iloc[0] == pytest.approx(0.0)


def test_zipf_table_empty():
    assert zipf_table({}).empty


def test_perfect_zipf_distribution():
    fit = fit_zipf({'a': 12, 'b': 6, 'c': 4, 'd': 3})
    assert fit.slope == pytest.approx(-1.0)
    assert fit.intercept == pytest.approx(1.07918, rel=1e-4)
    assert fit.r_squared == pytest.approx(1.0)
    assert fit.n_types == 4


def test_fit_needs_two_types():
    with pytest.raises(InvalidInputError):
        fit_zipf({'only': 5})
