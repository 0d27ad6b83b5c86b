# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Command-line interface for kotlex.

Subcommands:
    analyze FILE...     Analyze files and print the report (or JSON)
    interactive         Prompt for Java/Kotlin and analyze Input.java / Input.kt
    watch DIR           Re-analyze sources whenever they change
    serve               Run the MCP server

Exit codes for analyze: 0 no diagnostics, 1 diagnostics found,
2 a file could not be analyzed.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console

from kotlex.analyzer import AnalysisError, LexicalAnalyzer
from kotlex.config import Config
from kotlex.languages import Language
from kotlex.logging_setup import resolve_level, setup_logging
from kotlex.report import ReportRenderer, format_json

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DIAGNOSTICS = 1
EXIT_ERROR = 2

FIXTURE_FILENAMES = {
    Language.JAVA: "Input.java",
    Language.KOTLIN: "Input.kt",
}

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="kotlex",
        description="Lexical analyzer and diagnostic checker for Java and Kotlin sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    kotlex analyze Input.kt
    kotlex analyze --json src/Main.java src/App.kt
    kotlex interactive --directory tests/fixtures
        """,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file. Default: ./.kotlex.yml",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Write structured JSON logs to this directory",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze one or more source files")
    analyze.add_argument("files", nargs="+", type=Path, help="Source files (.java, .kt)")
    analyze.add_argument("--json", action="store_true", help="Output JSON instead of tables")

    interactive = subparsers.add_parser("interactive", help="Interactive Java/Kotlin prompt")
    interactive.add_argument(
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Directory containing Input.java and Input.kt. Default: current directory",
    )

    watch = subparsers.add_parser("watch", help="Re-analyze sources on change")
    watch.add_argument("directory", type=Path, help="Directory to watch")

    serve = subparsers.add_parser("serve", help="Run the MCP server")
    serve.add_argument(
        "--transport",
        type=str,
        choices=["stdio", "streamable-http", "sse"],
        default="stdio",
        help="Transport type for MCP server. Default: stdio",
    )

    return parser.parse_args(argv)


def configure_logging(config: Config, log_dir: Optional[Path], verbose: bool) -> None:
    level = logging.DEBUG if verbose else resolve_level(config.log_level)
    if log_dir is not None:
        setup_logging(log_dir=log_dir, log_level=level, console_output=verbose)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stderr,
        )


def build_renderer(config: Config, no_color: bool = False) -> ReportRenderer:
    """Report renderer on stdout; color needs both the config and no --no-color."""
    color = config.color_output and not no_color
    return ReportRenderer(Console(no_color=not color, highlight=False))


def run_analyze(
    analyzer: LexicalAnalyzer,
    files: List[Path],
    renderer: ReportRenderer,
    as_json: bool = False,
) -> int:
    """Analyze files and print results.

    Returns:
        Process exit code.
    """
    exit_code = EXIT_OK
    json_documents: List[str] = []

    for path in files:
        try:
            result = analyzer.analyze_file(path)
        except AnalysisError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            exit_code = EXIT_ERROR
            continue

        if result.diagnostics and exit_code == EXIT_OK:
            exit_code = EXIT_DIAGNOSTICS

        if as_json:
            json_documents.append(format_json(result))
        else:
            renderer.render(result)

    if as_json and json_documents:
        if len(json_documents) == 1:
            print(json_documents[0])
        else:
            print("[\n" + ",\n".join(json_documents) + "\n]")

    return exit_code


def prompt_language(input_fn: InputFn = input, output: OutputFn = print) -> Optional[Language]:
    """Ask for Java or Kotlin until a valid choice is made.

    Returns:
        The chosen language, or None on end of input.
    """
    while True:
        try:
            answer = input_fn("\nSelect language: (1) Java  (2) Kotlin  [enter 1 or 2]: ").strip()
        except EOFError:
            return None
        if not answer:
            continue
        if answer[0] == "1":
            return Language.JAVA
        if answer[0] == "2":
            return Language.KOTLIN
        output("Invalid choice. Please enter 1 or 2.")


def prompt_yes_no(message: str, input_fn: InputFn = input, output: OutputFn = print) -> bool:
    """Ask a y/n question until answered. End of input counts as 'no'."""
    while True:
        try:
            answer = input_fn(f"{message} (y/n): ").strip().lower()
        except EOFError:
            return False
        if not answer:
            continue
        if answer[0] == "y":
            return True
        if answer[0] == "n":
            return False
        output("Please answer y or n.")


def run_interactive(
    analyzer: LexicalAnalyzer,
    renderer: ReportRenderer,
    directory: Path,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> int:
    """Interactive loop: pick a language, analyze its input file, repeat."""
    output("Lexical Analyzer for Java and Kotlin")
    while True:
        language = prompt_language(input_fn, output)
        if language is None:
            output("Input error. Exiting.")
            return EXIT_ERROR

        path = directory / FIXTURE_FILENAMES[language]
        output(f"Selected file: {path.name}")
        if not prompt_yes_no("Proceed with analysis on this file", input_fn, output):
            continue

        try:
            result = analyzer.analyze_file(path)
        except AnalysisError as e:
            output(f"ERROR: {e}")
        else:
            renderer.render(result)

        if not prompt_yes_no("Do you want to continue and analyze another file", input_fn, output):
            output("Exiting. Goodbye.")
            return EXIT_OK


def run_watch(analyzer: LexicalAnalyzer, renderer: ReportRenderer, directory: Path) -> int:
    """Watch a directory and re-analyze changed sources until interrupted."""
    from kotlex.watcher import SourceWatcher

    def on_change(file_path: str) -> None:
        try:
            renderer.render(analyzer.analyze_file(file_path))
        except AnalysisError as e:
            logger.warning(str(e))

    watcher = SourceWatcher(
        str(directory),
        on_change=on_change,
        ignore_patterns=analyzer.config.ignore_patterns,
    )
    watcher.start()
    try:
        while watcher.is_running():
            time.sleep(0.5)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping watcher")
    finally:
        watcher.stop()
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config = Config(config_path=args.config) if args.config else Config()
    configure_logging(config, args.log_dir, args.verbose)

    analyzer = LexicalAnalyzer(config)
    renderer = build_renderer(config, args.no_color)

    if args.command == "analyze":
        return run_analyze(analyzer, args.files, renderer, as_json=args.json)
    if args.command == "interactive":
        return run_interactive(analyzer, renderer, args.directory)
    if args.command == "watch":
        return run_watch(analyzer, renderer, args.directory)
    if args.command == "serve":
        from kotlex.mcp_server import KotlexMCPServer

        KotlexMCPServer(config=config, analyzer=analyzer).run(transport=args.transport)
        return EXIT_OK

    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
