"""
Command Line Interface

Main entry point for running the credit risk benchmark.
"""

from typing import List, Optional
import argparse
import sys

from credit_risk_bench.config.loader import load_config
from credit_risk_bench.core.logger import setup_logging, get_logger
from credit_risk_bench.pipeline.orchestrator import BenchmarkPipeline


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Credit Risk Model Benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with the default configuration
  credit-risk-bench --config config/benchmark.yaml

  # Use a different input file and seed
  credit-risk-bench --input data/credit_data.csv --seed 7

  # Save the comparison report next to the run outputs
  credit-risk-bench --save-report --output-dir outputs/benchmark

  # Only validate the configuration
  credit-risk-bench --config config/benchmark.yaml --dry-run
        """
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='Path to YAML configuration file (default: built-in defaults)'
    )

    parser.add_argument(
        '--input', '-i',
        type=str,
        default=None,
        help='Path to the input CSV file'
    )

    parser.add_argument(
        '--parquet',
        type=str,
        default=None,
        help='Path of the intermediate Parquet file'
    )

    parser.add_argument(
        '--seed', '-s',
        type=int,
        default=None,
        help='Seed for the train/test split'
    )

    parser.add_argument(
        '--train-fraction',
        type=float,
        default=None,
        help='Fraction of rows assigned to training (default: 0.7)'
    )

    parser.add_argument(
        '--model-path',
        type=str,
        default=None,
        help='Where to write the persisted model'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        default=None,
        help='Output directory for reports and metadata'
    )

    parser.add_argument(
        '--save-report',
        action='store_true',
        help='Save the comparison report'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Validate configuration without running the benchmark'
    )

    return parser.parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict:
    overrides = {
        'data.input_path': args.input,
        'data.parquet_path': args.parquet,
        'splitting.seed': args.seed,
        'splitting.train_fraction': args.train_fraction,
        'persistence.path': args.model_path,
        'output.base_dir': args.output_dir,
    }
    if args.save_report:
        overrides['output.save_report'] = True
    if args.verbose:
        overrides['logging.level'] = 'DEBUG'
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logger = get_logger('credit_risk_bench.cli')

    try:
        config = load_config(args.config, cli_overrides=_cli_overrides(args))
    except Exception as e:
        setup_logging(log_level='DEBUG' if args.verbose else 'INFO')
        logger.exception(f"Invalid configuration: {e}")
        return 1

    setup_logging(config=config.logging.model_dump())
    logger.info("Starting credit risk benchmark")

    if args.dry_run:
        logger.info("Dry run mode - validating configuration")
        logger.info(f"Models: {[spec.name for spec in config.models]}")
        if config.ensemble.enabled:
            logger.info(f"Ensemble: {config.ensemble.name} over {config.ensemble.members}")
        logger.info("Configuration valid!")
        return 0

    try:
        result = BenchmarkPipeline(config).run()
    except Exception as e:
        logger.exception(f"Benchmark failed: {e}")
        return 1

    logger.info("Benchmark completed successfully!")
    if result.persisted_path is not None:
        logger.info(f"Model saved to: {result.persisted_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
