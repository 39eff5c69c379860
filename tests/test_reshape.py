import pandas as pd
import pytest

from text_frequency_toolkit import FrequencyEngine, InvalidInputError, Tokenizer, to_long, to_wide


@pytest.fixture
def long_table():
    return pd.DataFrame({
        'group_label': ['b', 'b', 'a'],
        'token': ['zeta', 'alpha', 'zeta'],
        'count': [3, 1, 2],
        'ipm': [750.0, 250.0, 1000.0],
    })


def test_to_wide_orders_rows_and_columns(long_table):
    wide = to_wide(long_table, value='count')
    assert wide.index.tolist() == ['a', 'b']
    assert wide.columns.tolist() == ['zeta', 'alpha']
    assert wide.loc['a', 'alpha'] == 0
    assert wide.loc['b', 'zeta'] == 3


def test_to_long_drops_zero_cells(long_table):
    long = to_long(to_wide(long_table), value='ipm')
    assert list(long.columns) == ['group_label', 'token', 'ipm']
    assert len(long) == 3
    cells = {(g, t): v for g, t, v in long.itertuples(index=False)}
    assert cells[('b', 'zeta')] == pytest.approx(750.0)
    assert ('a', 'alpha') not in cells


def test_to_wide_missing_column(long_table):
    with pytest.raises(InvalidInputError):
        to_wide(long_table.drop(columns=['ipm']))


def test_round_trip_with_tokens_named_like_value_columns():
    docs = [
        {'id': 1, 'text': 'We count the cells', 'group_label': 'biologist'},
        {'id': 2, 'text': 'Atoms bond, ipm', 'group_label': 'chemist'},
    ]
    table = FrequencyEngine().frequency_table(Tokenizer().tokenize(docs))

    for value in ('count', 'ipm'):
        long = to_long(to_wide(table, value=value), value=value)
        assert list(long.columns) == ['group_label', 'token', value]
        assert len(long) == len(table)
        cells = {(g, t): v for g, t, v in long.itertuples(index=False)}
        assert ('biologist', 'count') in cells
        assert ('chemist', 'ipm') in cells
