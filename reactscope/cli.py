"""CLI entrypoints for reactscope commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .analyzers.workspace import WorkspaceAnalyzer
from .errors import ConfigError
from .exporters import EXPORT_FORMATS, export_components, write_export
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator


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
        help="Path to the project root (defaults to current directory).",
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reactscope",
        description="Inspect React components for hooks, state, context and store usage.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze component files and print or export the results.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_path_argument(analyze_parser)
    analyze_parser.add_argument(
        "--format",
        choices=sorted(EXPORT_FORMATS),
        default="json",
        help="Output format (default: json).",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the export to this file or directory instead of stdout.",
    )
    analyze_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of files analyzed concurrently (overrides configuration).",
    )
    analyze_parser.add_argument(
        "--no-props",
        action="store_true",
        help="Skip prop extraction through react-docgen.",
    )
    analyze_parser.add_argument(
        "--cache",
        action="store_true",
        help="Reuse and update the on-disk result cache under .reactscope/.",
    )

    workspace_parser = subparsers.add_parser(
        "workspace",
        help="List NX workspace projects and their dependencies.",
    )
    _add_verbose_option(workspace_parser, suppress_default=True)
    _add_path_argument(workspace_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve analysis results over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_path_argument(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=3000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for reactscope commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    if args.command == "analyze":
        orchestrator = Orchestrator()
        try:
            report = orchestrator.run(
                args.path,
                max_workers=args.workers,
                props=False if args.no_props else None,
                use_cache=True if args.cache else None,
                progress=lambda done, total, path: logger.debug("[%d/%d] %s", done, total, path),
            )
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        for skipped in report.skipped:
            logger.warning("Skipped %s: %s", skipped.path, skipped.reason)
        if args.output is not None:
            target = write_export(report.components, args.format, args.output)
            print(f"Component analysis results saved to {_relativize(target)}")
        else:
            sys.stdout.write(export_components(report.components, args.format))
    elif args.command == "workspace":
        workspace = WorkspaceAnalyzer(args.path)
        if not workspace.is_nx_workspace():
            logger.info("No nx.json found under %s", workspace.root)
        payload = {
            "nx": workspace.is_nx_workspace(),
            "projects": [project.to_dict() for project in workspace.get_projects().values()],
            "dependencies": [dependency.to_dict() for dependency in workspace.get_dependencies()],
        }
        print(json.dumps(payload, indent=2))
    elif args.command == "serve":
        from .service import run_service

        run_service(args.path, host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
