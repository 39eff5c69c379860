"""
Command line interface for the Text Frequency Toolkit.

Examples:
  text-frequency frequencies lectures.xlsx --mode remove --sort-by ipm
  text-frequency top lectures.xlsx --group chemist --top-n 10
  text-frequency project lectures.xlsx --mode keep -k 2
  text-frequency run lectures.xlsx --output-dir results/
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import pandas as pd
from dotenv import load_dotenv

from .exceptions import TextFrequencyError
from .frequency import zipf_table, fit_zipf
from .pipeline import AnalysisPipeline
from .projection import build_matrix
from .utils.config import PipelineConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'TEXT_FREQUENCY_CONFIG'


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with one subcommand per output."""
    parser = argparse.ArgumentParser(
        prog='text-frequency',
        description='Word frequency, Zipf and PCA stylometry over a table of documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split('Examples:', 1)[1] if __doc__ else None
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('input', help='Input table (.csv, .tsv, .xlsx)')
    common.add_argument('--config', help=f'YAML configuration (default: ${CONFIG_ENV_VAR})')
    common.add_argument('--id-column', help='Document identifier column')
    common.add_argument('--text-column', help='Free text column')
    common.add_argument('--group-column', help='Group label column')
    common.add_argument('--sheet', help='Excel sheet name')
    common.add_argument('--stopwords', help='Bundled language name or stopword file')
    common.add_argument('--mode', choices=['remove', 'keep', 'none'],
                        help='Stopword filter: remove matches, keep only matches, or no filter')
    common.add_argument('--top-n', type=int, help='Top-N cutoff')
    common.add_argument('--scale', type=float, help='IPM scale constant')
    common.add_argument('-k', '--n-components', type=int, help='Number of principal components')
    common.add_argument('--standardize', action='store_true',
                        help='Scale matrix columns to unit variance before PCA')
    common.add_argument('--value', choices=['ipm', 'count'], help='Matrix cell values')
    common.add_argument('-o', '--output', help='Write CSV here instead of stdout')
    common.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    freq = subparsers.add_parser('frequencies', parents=[common], help='Per-group frequency table')
    freq.add_argument('--sort-by', default=None,
                      choices=['group_label', 'token', 'count', 'group_total', 'ipm'],
                      help='Sort column')
    freq.add_argument('--ascending', action='store_true', help='Sort ascending')

    top = subparsers.add_parser('top', parents=[common], help='Ranked top-N tokens')
    top.add_argument('--group', help='Restrict to one group (default: whole corpus)')

    subparsers.add_parser('zipf', parents=[common], help="Zipf's law rank-frequency table and fit")
    subparsers.add_parser('matrix', parents=[common], help='Sparse group x token matrix export')

    project = subparsers.add_parser('project', parents=[common], help='PCA projection of groups')
    project.add_argument('--what', choices=['coordinates', 'loadings', 'variance'],
                         default='coordinates', help='Which projection table to print')

    run = subparsers.add_parser('run', parents=[common], help='Full pipeline into a directory')
    run.add_argument('--output-dir', required=True, help='Directory for the CSV outputs')

    return parser


def load_config(args: argparse.Namespace) -> PipelineConfig:
    """Configuration file (flag or environment) with explicit flags on top."""
    path = args.config or os.getenv(CONFIG_ENV_VAR)
    config = PipelineConfig.from_yaml(path) if path else PipelineConfig()

    overrides = {
        'dataset.id_column': args.id_column,
        'dataset.text_column': args.text_column,
        'dataset.group_column': args.group_column,
        'dataset.sheet_name': args.sheet,
        'stopwords.source': args.stopwords,
        'frequency.top_n': args.top_n,
        'frequency.scale': args.scale,
        'projection.n_components': args.n_components,
        'projection.value': args.value,
    }
    for key, value in overrides.items():
        if value is not None:
            config.set(key, value)

    if args.mode is not None:
        # One flag drives both the content table and the projection filter
        config.set('stopwords.mode', args.mode)
        config.set('projection.stopword_mode', args.mode)
    if args.standardize:
        config.set('projection.scale', True)

    return config


def _emit(table: pd.DataFrame, output: Optional[str]) -> None:
    if output:
        table.to_csv(output, index=False)
        logger.info(f"Wrote {len(table)} rows to {output}")
    else:
        table.to_csv(sys.stdout, index=False)


def run_command(args: argparse.Namespace) -> int:
    config = load_config(args)
    pipeline = AnalysisPipeline(config)
    dataset = pipeline.load_dataset(args.input)

    if args.command == 'run':
        result = pipeline.run(dataset)
        for name, path in result.save(args.output_dir).items():
            print(f"{name}: {path}")
        return 0

    records = pipeline.tokens(dataset)
    stopwords = pipeline.stopwords()

    if args.command == 'frequencies':
        table = pipeline.frequencies(records, stopwords, config.get('stopwords.mode'))
        if args.sort_by:
            table = table.sort_values(args.sort_by, ascending=args.ascending, kind='stable')
        _emit(table, args.output)

    elif args.command == 'top':
        table = pipeline.frequencies(records, stopwords, config.get('stopwords.mode'))
        ranked = pipeline.engine.top_n(table, config.get('frequency.top_n'), group=args.group)
        _emit(pd.DataFrame(ranked, columns=['token', 'count']), args.output)

    elif args.command == 'zipf':
        counts = pipeline.engine.count(records)
        fit = fit_zipf(counts)
        print(f"# slope={fit.slope:.4f} intercept={fit.intercept:.4f} "
              f"r_squared={fit.r_squared:.4f} n_types={fit.n_types}", file=sys.stderr)
        _emit(zipf_table(counts), args.output)

    elif args.command == 'matrix':
        table = pipeline.frequencies(records, stopwords, config.get('projection.stopword_mode'))
        matrix = build_matrix(table, value=config.get('projection.value'),
                              expected_groups=dataset.group_labels())
        _emit(matrix.to_coordinates(), args.output)

    elif args.command == 'project':
        _, projection = pipeline.project(dataset, records, stopwords)
        if args.what == 'loadings':
            table = projection.loadings_frame().rename_axis('token').reset_index()
        elif args.what == 'variance':
            table = projection.explained_variance()
        else:
            table = projection.coordinates.reset_index()
        _emit(table, args.output)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        return run_command(args)
    except (TextFrequencyError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
