"""jump2pwa - Generate manifest, offline page and service worker for a Progressive Web App."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Callable

__version__ = "0.1.0"

DEFAULT_CONFIG_PATH = "pwa.yaml"

if TYPE_CHECKING:
    from .config import PwaConfig

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def _resolve_config(args: argparse.Namespace) -> "PwaConfig":
    """Load the configuration and apply command line overrides.

    Exits with status 1 on configuration errors.
    """
    from dataclasses import replace

    from .config import ConfigError, load_config, parse_config

    try:
        if args.config is not None:
            config = load_config(args.config)
            logger.info("Configuration loaded from %s", args.config)
        elif Path(DEFAULT_CONFIG_PATH).exists():
            config = load_config(DEFAULT_CONFIG_PATH)
            logger.info("Configuration loaded from %s", DEFAULT_CONFIG_PATH)
        else:
            config = parse_config({})
            logger.debug("No configuration file, using defaults")

        if args.output_dir is not None:
            config = replace(config, output_dir=args.output_dir)
        if getattr(args, "strategy", None) is not None:
            config = replace(config, service_worker=replace(config.service_worker, caching_strategy=args.strategy))
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    return config


def _run_generator(args: argparse.Namespace, render: Callable, write: Callable) -> None:
    """Shared flow for every generating subcommand."""
    _setup_logging(args.verbose)

    config = _resolve_config(args)

    if args.dry_run:
        for filename, content in render(config).items():
            print(f"--- {filename} ---")
            print(content)
        print("[Dry run] No files written.")
        return

    try:
        generated = write(config)
    except OSError as e:
        logger.error("Failed to write PWA files: %s", e)
        sys.exit(1)

    logger.debug("Generated %d file(s) in %s", len(generated), config.output_dir)


def _cmd_setup(args: argparse.Namespace) -> None:
    """Execute the setup command - generate all three files."""
    from .writer import render_all, setup_pwa

    _run_generator(args, render_all, setup_pwa)


def _cmd_manifest(args: argparse.Namespace) -> None:
    """Execute the manifest command."""
    from ._pwa import MANIFEST_FILENAME, render_manifest
    from .writer import generate_manifest

    _run_generator(
        args,
        lambda config: {MANIFEST_FILENAME: render_manifest(config.manifest)},
        lambda config: [generate_manifest(config.output_dir, config.manifest)],
    )


def _cmd_offline_page(args: argparse.Namespace) -> None:
    """Execute the offline-page command."""
    from ._pwa import render_offline_page
    from .writer import create_offline_page

    _run_generator(
        args,
        lambda config: {config.offline.filename: render_offline_page(config.offline)},
        lambda config: [create_offline_page(config.output_dir, config.offline)],
    )


def _cmd_service_worker(args: argparse.Namespace) -> None:
    """Execute the service-worker command."""
    from ._pwa import SERVICE_WORKER_FILENAME, render_service_worker
    from .writer import generate_service_worker, service_worker_config_for

    _run_generator(
        args,
        lambda config: {SERVICE_WORKER_FILENAME: render_service_worker(service_worker_config_for(config))},
        lambda config: [generate_service_worker(config.output_dir, service_worker_config_for(config))],
    )


def _cmd_strategies(args: argparse.Namespace) -> None:
    """Execute the strategies command - list valid caching strategies."""
    from .config import strategy_names

    for name in strategy_names():
        print(name)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c", "--config",
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory to write files into (overrides config, default: www)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated files without writing them",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )


def _add_strategy_argument(parser: argparse.ArgumentParser) -> None:
    from .config import strategy_names

    parser.add_argument(
        "--strategy",
        choices=strategy_names(),
        default=None,
        help="Caching strategy for the service worker (overrides config)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="jump2pwa - Generate the files a Progressive Web App needs"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"jump2pwa {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # Setup subcommand (default behavior)
    setup_parser = subparsers.add_parser(
        "setup",
        help="Generate manifest.json, offline page and service-worker.js (default)",
    )
    _add_common_arguments(setup_parser)
    _add_strategy_argument(setup_parser)
    setup_parser.set_defaults(func=_cmd_setup)

    manifest_parser = subparsers.add_parser(
        "manifest",
        help="Generate manifest.json only",
    )
    _add_common_arguments(manifest_parser)
    manifest_parser.set_defaults(func=_cmd_manifest)

    offline_parser = subparsers.add_parser(
        "offline-page",
        help="Generate the offline fallback page only",
    )
    _add_common_arguments(offline_parser)
    offline_parser.set_defaults(func=_cmd_offline_page)

    sw_parser = subparsers.add_parser(
        "service-worker",
        help="Generate service-worker.js only (default assets: /, /index.html, /css/style.css, as for setup)",
    )
    _add_common_arguments(sw_parser)
    _add_strategy_argument(sw_parser)
    sw_parser.set_defaults(func=_cmd_service_worker)

    strategies_parser = subparsers.add_parser(
        "strategies",
        help="List the available caching strategies",
    )
    strategies_parser.set_defaults(func=_cmd_strategies)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the jump2pwa package."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Default to 'setup' if no command specified
    if args.command is None:
        args = parser.parse_args(["setup"])

    args.func(args)
