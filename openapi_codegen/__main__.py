#!/usr/bin/env python3
"""
Generate TypeScript models and request wrappers from OpenAPI specs.

Usage:
    python -m openapi_codegen CONFIG [options]

Examples:
    python -m openapi_codegen codegen.config.json
    python -m openapi_codegen --config codegen.yaml --verbose
    python -m openapi_codegen codegen.yaml --clean
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from openapi_codegen.api_codegen.main import OpenAPICodeGenerator
from openapi_codegen.config import load_config
from openapi_codegen.shared.errors import CodegenError, ConfigError

logger = logging.getLogger("openapi_codegen")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openapi-codegen",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        help="Path to the JSON or YAML configuration file",
    )
    parser.add_argument(
        "--config",
        dest="config_option",
        type=Path,
        help="Path to the configuration file (alternative to the positional argument)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every file written",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Clean the output directory before generating",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config_path = args.config_option or args.config
        if config_path is None:
            raise ConfigError("No configuration file given")
        config = load_config(config_path)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    config.verbose = args.verbose
    if args.clean:
        config.options = dataclasses.replace(config.options, clean_output_dir=True)

    try:
        summary = OpenAPICodeGenerator(config).generate()
    except (CodegenError, OSError) as e:
        logger.error("Code generation failed: %s", e)
        return 1

    print(f"\nGenerated {summary.files_written} files ({summary.write_errors} write errors)")
    if summary.failed_endpoints or summary.failed_patterns:
        print(
            f"Skipped {summary.failed_endpoints} APIs and "
            f"{summary.failed_patterns} path patterns, see the log above"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
