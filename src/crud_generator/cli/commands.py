from __future__ import annotations
import argparse
import logging
import sys
from dotenv import load_dotenv

from crud_generator.config import GeneratorConfig, load_generator_config
from crud_generator.editor import (
    RecordingNotifier,
    build_crud_text,
    generate_crud,
    open_file_surface,
)
from crud_generator.errors import CrudGeneratorError, NoActiveEditorError
from crud_generator.procedures import parse_package_body, summarize_routines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crudgen",
        description="Generate Oracle PL/SQL CRUD packages from table_name/table_attr declarations"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    # Generate in place
    gen = sub.add_parser("generate", help="Append the generated package to the file")
    gen.add_argument("file", help="File containing the table description")
    gen.add_argument("--lines", type=parse_line_range, default=None,
                     help="Selected lines as START:END, 1-based inclusive (default: whole file)")
    gen.add_argument("--config", default=None,
                     help="Path to generator configuration YAML file (default: $CRUDGEN_CONFIG)")

    # Preview on stdout
    preview = sub.add_parser("preview", help="Print the generated package without editing the file")
    preview.add_argument("file", help="File containing the table description")
    preview.add_argument("--lines", type=parse_line_range, default=None,
                         help="Selected lines as START:END, 1-based inclusive (default: whole file)")
    preview.add_argument("--config", default=None,
                         help="Path to generator configuration YAML file (default: $CRUDGEN_CONFIG)")
    preview.add_argument("--summary", action="store_true",
                         help="Also list the generated procedures and their parameters")

    return parser


def parse_line_range(value: str) -> tuple[int | None, int | None]:
    """Parse START:END (either side may be empty) into a line range."""
    start_str, sep, end_str = value.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected START:END, got '{value}'")
    try:
        start = int(start_str) if start_str else None
        end = int(end_str) if end_str else None
    except ValueError:
        raise argparse.ArgumentTypeError(f"line numbers must be integers: '{value}'")
    if (start is not None and start < 1) or (end is not None and end < 1):
        raise argparse.ArgumentTypeError(f"line numbers start at 1: '{value}'")
    if start is not None and end is not None and end < start:
        raise argparse.ArgumentTypeError(f"invalid line range: '{value}'")
    return start, end


def configure_logging(config: GeneratorConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper()),
        format=config.logging.format,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def run(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_generator_config(args.config)
        configure_logging(config)

        start, end = args.lines or (None, None)
        if args.cmd == "generate":
            exit_code = generate_file(args.file, start, end, config)
        else:
            exit_code = preview_file(args.file, start, end, config, args.summary)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def generate_file(
    path: str,
    start_line: int | None,
    end_line: int | None,
    config: GeneratorConfig
) -> int:
    """Run the generate command on a file and report the outcome.

    Returns:
        Process exit code (0 on success)
    """
    notifier = RecordingNotifier()
    surface = open_file_surface(path, start_line, end_line)
    generated = generate_crud(surface, notifier, config)

    for message in notifier.errors:
        print(f"Error: {message}", file=sys.stderr)
    for message in notifier.infos:
        print(f"✓ {message}")

    if generated is None:
        return 1

    print(f"  Package: {generated.package.package_name}")
    print(f"  Columns: {', '.join(generated.schema.column_names)}")
    print(f"  Primary key: {generated.schema.primary_key_name or '(none)'}")
    return 0


def preview_file(
    path: str,
    start_line: int | None,
    end_line: int | None,
    config: GeneratorConfig,
    summary: bool = False
) -> int:
    """Print the generated package for a file without modifying it.

    Returns:
        Process exit code (0 on success)
    """
    surface = open_file_surface(path, start_line, end_line)
    try:
        if surface is None:
            raise NoActiveEditorError()
        generated = build_crud_text(surface.get_selection(), config)
    except CrudGeneratorError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(generated.package.declarations)
    print(generated.package.definitions, end="")

    if summary:
        routines = parse_package_body(generated.package.definitions)
        print(f"\nProcedures ({len(routines)}):")
        for line in summarize_routines(routines):
            print(f"  {line}")

    return 0


if __name__ == "__main__":
    run()
