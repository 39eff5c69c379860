import pytest

from text_frequency_toolkit import InvalidInputError, StopwordSet, load_stopwords


def test_bundled_english_list():
    stopwords = StopwordSet.from_language('English')
    assert 'the' in stopwords
    assert 'cell' not in stopwords
    assert stopwords.source == 'english'


def test_unknown_language():
    with pytest.raises(InvalidInputError):
        StopwordSet.from_language('klingon')


def test_from_file_skips_comments_and_lowercases(tmp_path):
    path = tmp_path / 'stop.txt'
    path.write_text("# function words\nThe\n\n  of \nAND\n", encoding='utf-8')

    stopwords = StopwordSet.from_file(path)
    assert set(stopwords) == {'the', 'of', 'and'}
    assert len(stopwords) == 3


def test_from_file_accepts_non_ascii(tmp_path):
    path = tmp_path / 'stop_es.txt'
    path.write_text("además\nque\n", encoding='utf-8')
    assert 'además' in StopwordSet.from_file(path)


def test_from_file_rejects_undecodable_bytes(tmp_path):
    path = tmp_path / 'garbled.txt'
    path.write_bytes(b"the\n\xff\xfa\xfb\n")
    with pytest.raises(InvalidInputError):
        StopwordSet.from_file(path)


def test_load_stopwords_resolves_language_and_path(tmp_path):
    assert load_stopwords('english').source == 'english'

    path = tmp_path / 'custom.txt'
    path.write_text("um\nuh\n", encoding='utf-8')
    assert set(load_stopwords(str(path))) == {'uh', 'um'}

    with pytest.raises(InvalidInputError):
        load_stopwords(str(tmp_path / 'missing.txt'))
