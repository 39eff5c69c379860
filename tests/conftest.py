import pandas as pd
import pytest

from text_frequency_toolkit import CorpusDataset, Tokenizer


LECTURES = [
    (1, "The cell is the basic unit of life.", "biologist"),
    (2, "I think the cell divides and the cell grows.", "biologist"),
    (3, "Atoms bond and the bond is strong.", "chemist"),
    (4, "We mix the acid with a base.", "chemist"),
    (5, "The market is a place where we trade.", "economist"),
    (6, "Prices rise and I think we should save.", "economist"),
]


@pytest.fixture
def lecture_df():
    return pd.DataFrame(LECTURES, columns=['id', 'text', 'group'])


@pytest.fixture
def lecture_dataset(lecture_df):
    return CorpusDataset(lecture_df)


@pytest.fixture
def lecture_csv(lecture_df, tmp_path):
    path = tmp_path / 'lectures.csv'
    lecture_df.to_csv(path, index=False)
    return path


@pytest.fixture
def lecture_records(lecture_dataset):
    return list(Tokenizer().tokenize(lecture_dataset.documents()))
