"""CLI entrypoints for repodocs commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import load_config
from .errors import ConfigurationError, RepoDocsError
from .logging import configure_logging
from .models import GenerationResult
from .orchestrator import Orchestrator
from .prompting.constants import DOCUMENT_FILENAMES

_DOCUMENT_CHOICES = {
    "readme": "readme",
    "getting-started": "gettingStarted",
    "api": "apiDocs",
}


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


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also append log records to this file.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .repodocs.yml file or its directory (defaults to the current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repodocs",
        description="Generate README, getting-started and API docs for a GitHub repository.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate documentation for a repository URL.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_log_file_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument(
        "repo_url",
        help="GitHub repository URL, for example https://github.com/owner/repo.",
    )
    output_group = generate_parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write README.md, GETTING_STARTED.md and API.md into this directory.",
    )
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON.",
    )
    generate_parser.add_argument(
        "--document",
        choices=sorted(_DOCUMENT_CHOICES),
        default="readme",
        help="Document to print when no output directory is given (defaults to readme).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_log_file_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repodocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        try:
            orchestrator = Orchestrator(load_config(args.config))
            result = orchestrator.run(args.repo_url)
        except ConfigurationError as exc:
            parser.exit(1, f"repodocs configuration error: {exc}\n")
        except RepoDocsError as exc:
            parser.exit(1, f"repodocs generate failed: {exc}\nRun with --verbose for more details.\n")
        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
        elif args.output_dir is not None:
            for path in write_documents(result, args.output_dir):
                print(f"Wrote {_relativize(path)}")
        else:
            print(result.documents.to_dict()[_DOCUMENT_CHOICES[args.document]])
    elif args.command == "serve":
        from .service import run_service

        run_service(args.host, args.port, config_path=args.config)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def write_documents(result: GenerationResult, output_dir: Path) -> list[Path]:
    """Write each generated document under its conventional file name."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for key, content in result.documents.to_dict().items():
        target = output_dir / DOCUMENT_FILENAMES[key]
        target.write_text(content.rstrip("\n") + "\n", encoding="utf-8")
        written.append(target)
    return written


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
