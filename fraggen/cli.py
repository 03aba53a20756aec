"""CLI entrypoints for fraggen commands."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .catalog import registry_for
from .config import ConfigError, load_config
from .errors import FragmentError
from .logging import configure_logging
from .orchestrator import FragmentGenerator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root holding .fraggen.yml (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fraggen",
        description="Render marketing components into embeddable HTML/CSS fragments.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Regenerate every fragment and the root manifest.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_path_argument(build_parser)
    build_parser.add_argument(
        "--output",
        help="Output root for the fragment tree (overrides output_dir).",
    )
    build_parser.add_argument(
        "--live",
        action="store_true",
        help="Render every component through the component layer.",
    )
    build_parser.add_argument(
        "--tokens",
        action="store_true",
        help="Leave {{placeholder}} tokens in place of default values.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List registered components.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_path_argument(list_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the preview service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for fraggen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "build":
        try:
            config = load_config(Path(args.path))
            changes: dict[str, object] = {}
            if args.output:
                changes["output_dir"] = Path(args.output).expanduser().resolve()
            if args.live:
                changes["strategy"] = "live"
            if args.tokens:
                changes["binding"] = "tokens"
            if changes:
                config = dataclasses.replace(config, **changes)
            result = FragmentGenerator(config=config).run()
        except (ConfigError, FragmentError) as exc:
            parser.exit(1, f"fraggen build failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Fragments written to {_relativize(result.output_root)}")
    elif args.command == "list":
        try:
            config = load_config(Path(args.path))
        except ConfigError as exc:
            parser.exit(1, f"fraggen list failed: {exc}\n")
        for descriptor in registry_for(config.strategy):
            print(f"{descriptor.id}\t{descriptor.name}\t{descriptor.strategy}")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
