"""Command-line entrypoint for dataflow-ai."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dataflow_ai import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dataflow-ai",
        description=(
            "Generate entity relationship and data flow diagrams from a system "
            "description, and translate Mermaid ER diagrams to and from JSON."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "config-check",
        help="Validate environment configuration for dataflow-ai.",
    )
    parse_parser = subparsers.add_parser(
        "parse-diagram",
        help="Parse Mermaid erDiagram text into the JSON document form.",
    )
    parse_parser.add_argument("path", help="Diagram file, or '-' for stdin.")
    render_parser = subparsers.add_parser(
        "render-diagram",
        help="Render a JSON entity/relationship document as Mermaid erDiagram text.",
    )
    render_parser.add_argument("path", help="JSON document file, or '-' for stdin.")
    er_parser = subparsers.add_parser(
        "generate-er",
        help="Generate an ER diagram for a system description.",
    )
    er_parser.add_argument("description", help="System description.")
    er_parser.add_argument(
        "--format",
        choices=("diagram", "json"),
        default="diagram",
        help="Output Mermaid text or the JSON document (default: diagram).",
    )
    dfd_parser = subparsers.add_parser(
        "generate-dfd",
        help="Generate a Level 0 data flow diagram for a system description.",
    )
    dfd_parser.add_argument("description", help="System description.")
    docs_parser = subparsers.add_parser(
        "generate-docs",
        help="Generate data flow documentation JSON for a system description.",
    )
    docs_parser.add_argument("description", help="System description.")
    api_parser = subparsers.add_parser(
        "generate-api-docs",
        help="Generate OpenAPI documentation JSON for a system description.",
    )
    api_parser.add_argument("description", help="System description.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "config-check":
        from dataflow_ai.config import ConfigError, load_settings

        try:
            settings = load_settings()
        except ConfigError as exc:
            print(f"Configuration error:\n{exc}", file=sys.stderr)
            return 2

        key_count = len(settings.gemini_api_keys)
        redacted = f"*** ({key_count} key(s))" if key_count else "(not set)"
        print("Configuration loaded successfully:")
        print(f"- GEMINI_API_KEYS: {redacted}")
        print(f"- GEMINI_MODEL: {settings.gemini_model}")
        print(f"- GEMINI_API_VERSION: {settings.gemini_api_version}")
        print(f"- GEMINI_BASE_URL: {settings.gemini_base_url}")
        print(f"- GEMINI_MAX_ATTEMPTS: {settings.max_attempts}")
        print(f"- GEMINI_TIMEOUT_SECONDS: {settings.request_timeout_seconds}")
        return 0

    if args.command == "parse-diagram":
        from dataflow_ai.diagram import document_to_json, parse_diagram
        from dataflow_ai.llm.normalizer import normalize

        try:
            text = _read_input(args.path)
        except OSError as exc:
            print(f"Could not read diagram:\n{exc}", file=sys.stderr)
            return 1

        print(document_to_json(parse_diagram(normalize(text))))
        return 0

    if args.command == "render-diagram":
        from dataflow_ai.diagram import document_from_json, serialize_document
        from dataflow_ai.errors import ShapeValidationError
        from dataflow_ai.llm.normalizer import normalize

        try:
            document = document_from_json(normalize(_read_input(args.path)))
        except OSError as exc:
            print(f"Could not read document:\n{exc}", file=sys.stderr)
            return 1
        except ShapeValidationError as exc:
            print(f"Document validation failed:\n{exc}", file=sys.stderr)
            return 1

        print(serialize_document(document), end="")
        return 0

    if args.command in {
        "generate-er",
        "generate-dfd",
        "generate-docs",
        "generate-api-docs",
    }:
        from dataflow_ai import service
        from dataflow_ai.config import ConfigError, load_settings
        from dataflow_ai.diagram import document_to_json
        from dataflow_ai.errors import GenerationError
        from dataflow_ai.llm import create_generation_client
        from dataflow_ai.prompts import PromptBuildError

        try:
            settings = load_settings()
            client = create_generation_client(settings)
        except ConfigError as exc:
            print(f"Configuration error:\n{exc}", file=sys.stderr)
            return 2

        try:
            if args.command == "generate-er" and args.format == "json":
                document = service.generate_er_document(client, args.description)
                output = document_to_json(document)
            elif args.command == "generate-er":
                output = service.generate_er_diagram(client, args.description)
            elif args.command == "generate-dfd":
                output = service.generate_dfd_diagram(client, args.description)
            elif args.command == "generate-api-docs":
                documentation = service.generate_api_documentation(client, args.description)
                output = json.dumps(documentation, indent=2)
            else:
                documentation = service.generate_dfd_documentation(client, args.description)
                output = json.dumps(documentation, indent=2)
        except PromptBuildError as exc:
            print(f"Prompt build failed:\n{exc}", file=sys.stderr)
            return 1
        except GenerationError as exc:
            print(
                f"Generation failed ({exc.kind}, {exc.attempts} attempt(s)):\n{exc}",
                file=sys.stderr,
            )
            return 1

        print(output.rstrip("\n"))
        return 0

    print(f"Command '{args.command}' is not implemented.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
