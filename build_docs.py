#!/usr/bin/env python3
"""
JSDoc to Markdown Documentation Build - Main CLI Entry Point

Converts the JSDoc HTML pages under build/jsdoc/ into the Markdown pages the
repository hosts (docs/global.md, libs/extract/docs/API.md and
libs/extract/docs/global.md), rewriting code blocks, links and footers on
the way. Run from the project root with no arguments.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from config_loader import DEFAULT_CONFIG_PATH, ConfigLoader
from exporters import ExportError
from fetchers import FetcherError
from logger import log_config, log_section, setup_logging
from orchestrator import BuildOrchestrator, BuildReport

__version__ = "1.0.0"


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="Build repository Markdown documentation from JSDoc HTML output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build with the built-in paths
  python build_docs.py

  # Preview without writing files
  python build_docs.py --dry-run -v

  # Build another checkout
  python build_docs.py --root ../deep-props
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help=f'Path to configuration YAML file (default: {DEFAULT_CONFIG_PATH} if present)'
    )

    parser.add_argument(
        '--root',
        type=str,
        default=None,
        help='Project root the document paths are relative to (default: current directory)'
    )

    parser.add_argument(
        '--dry-run',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Convert and rewrite without writing any files'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v for INFO, -vv for DEBUG)'
    )

    return parser


def load_configuration(args: argparse.Namespace) -> dict:
    """Load, merge and validate configuration for this run."""
    config_path = args.config
    if config_path is None and args.root:
        config_path = str(Path(args.root) / DEFAULT_CONFIG_PATH)

    config = ConfigLoader.load(config_path, required=args.config is not None)
    config = ConfigLoader.merge_with_args(config, args)
    ConfigLoader.validate(config)
    return config


def run_build(config: dict, logger: logging.Logger) -> int:
    """Execute the complete build pipeline."""
    orchestrator = BuildOrchestrator(config, logger)
    report = orchestrator.run()

    report_generator = BuildReport(logger)
    print(report_generator.format_console_report(report))

    if report['summary']['dry_run']:
        logger.info("Dry-run complete. No files written.")
    else:
        logger.info("Build completed successfully")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(verbosity=args.verbose)
        logger = logging.getLogger('jsdoc_markdown.cli')

        config = load_configuration(args)

        # Reconfigure logging with config file settings
        logging_config = config.get('logging', {})
        setup_logging(
            verbosity=args.verbose,
            level=logging_config.get('level'),
            log_file=logging_config.get('file')
        )
        logger = logging.getLogger('jsdoc_markdown.cli')

        log_section("JSDoc Markdown Build")
        logger.info(f"Version: {__version__}")
        log_config(config)

        return run_build(config, logger)

    except FetcherError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2 if isinstance(e.__cause__, FileNotFoundError) else 1
    except ExportError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}", file=sys.stderr)
        return 2
    except (ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nBuild interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
