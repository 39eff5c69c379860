import pandas as pd
import pytest

from text_frequency_toolkit.cli import main


@pytest.fixture(autouse=True)
def no_env_config(monkeypatch):
    monkeypatch.delenv('TEXT_FREQUENCY_CONFIG', raising=False)


def test_frequencies_sorted(lecture_csv, tmp_path):
    out = tmp_path / 'freq.csv'
    assert main(['frequencies', str(lecture_csv), '--mode', 'none',
                 '--sort-by', 'count', '-o', str(out)]) == 0

    table = pd.read_csv(out)
    assert table.columns.tolist() == ['group_label', 'token', 'count', 'group_total', 'ipm']
    assert table['count'].is_monotonic_decreasing


def test_top_for_group(lecture_csv, tmp_path):
    out = tmp_path / 'top.csv'
    assert main(['top', str(lecture_csv), '--group', 'biologist', '--top-n', '1', '-o', str(out)]) == 0
    assert pd.read_csv(out).values.tolist() == [['cell', 3]]


def test_top_unknown_group_exits_with_error(lecture_csv, capsys):
    assert main(['top', str(lecture_csv), '--group', 'astronomer']) == 1
    assert 'astronomer' in capsys.readouterr().err


def test_zipf_to_stdout(lecture_csv, capsys):
    assert main(['zipf', str(lecture_csv)]) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith('rank,token,count,frequency,log_rank,log_frequency')
    assert 'slope=' in captured.err


def test_matrix_export(lecture_csv, tmp_path):
    out = tmp_path / 'matrix.csv'
    assert main(['matrix', str(lecture_csv), '--value', 'count', '-o', str(out)]) == 0
    assert pd.read_csv(out).columns.tolist() == ['group_label', 'token', 'count']


def test_project_variance(lecture_csv, tmp_path):
    out = tmp_path / 'variance.csv'
    assert main(['project', str(lecture_csv), '-k', '2', '--what', 'variance', '-o', str(out)]) == 0
    assert pd.read_csv(out)['component'].tolist() == ['PC1', 'PC2']


def test_run_with_config_file(lecture_csv, tmp_path):
    config = tmp_path / 'config.yaml'
    config.write_text("frequency:\n  top_n: 3\n")
    out_dir = tmp_path / 'results'

    assert main(['run', str(lecture_csv), '--config', str(config), '--output-dir', str(out_dir)]) == 0
    assert len(pd.read_csv(out_dir / 'top_tokens.csv')) == 3


def test_missing_input_exits_with_error(tmp_path):
    assert main(['frequencies', str(tmp_path / 'missing.csv')]) == 1


def test_missing_config_file_exits_with_error(lecture_csv, tmp_path, capsys):
    assert main(['frequencies', str(lecture_csv), '--config', str(tmp_path / 'nope.yaml')]) == 1
    assert 'error:' in capsys.readouterr().err


def test_config_from_environment(lecture_csv, tmp_path, monkeypatch):
    config = tmp_path / 'env.yaml'
    config.write_text("frequency:\n  top_n: 2\n")
    monkeypatch.setenv('TEXT_FREQUENCY_CONFIG', str(config))
    out = tmp_path / 'top.csv'

    assert main(['top', str(lecture_csv), '-o', str(out)]) == 0
    assert len(pd.read_csv(out)) == 2
