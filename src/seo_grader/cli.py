"""Command-line interface for the SEO grader."""

import asyncio
import json
import sys

from seo_grader.config import Config, GradingThresholds, settings
from seo_grader.exceptions import (
    InvalidInput,
    ProviderUnavailable,
    SEOGraderError,
    SuggestionFailure,
)
from seo_grader.grader import SEOGrader
from seo_grader.llm import build_llm_client
from seo_grader.logging_config import setup_logging
from seo_grader.models import AnalysisReport, CheckStatus

STATUS_MARKERS = {
    CheckStatus.PASS: "✅",
    CheckStatus.FAIL: "❌",
    CheckStatus.WARNING: "⚠️ ",
}


def read_html(path: str) -> str:
    """Read HTML from a file path, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def write_output(output: str, output_file=None) -> None:
    if output_file:
        with open(output_file, "w") as f:
            f.write(output)
        print(f"\nResults written to {output_file}")
    else:
        print(output)


def load_thresholds(args) -> GradingThresholds:
    if getattr(args, "thresholds", None):
        return GradingThresholds.from_file(args.thresholds)
    return GradingThresholds.from_env()


def print_report(report: AnalysisReport, keyword: str) -> None:
    """Print an analysis report in a formatted way.

    Args:
        report: The report to print
        keyword: The keyword the page was graded for
    """
    print(f"\n{'=' * 60}")
    print(f'SEO Grade for keyword: "{keyword}"')
    print(f"{'=' * 60}")
    print(f"\n📊 Score: {report.score}/100")

    print("\nChecks:")
    for check in report.checks:
        print(f"  {STATUS_MARKERS[check.result]} {check.factor}: {check.details}")

    if report.recommendations:
        print("\n💡 Recommendations:")
        for rec in report.recommendations:
            print(f"  • {rec}")

    print(f"\n{'=' * 60}\n")


def analyze_command(args):
    """Grade an HTML file for a keyword."""
    try:
        html_content = read_html(args.file)
        grader = SEOGrader(thresholds=load_thresholds(args))
        report = grader.analyze(html_content, args.keyword)
    except OSError as e:
        print(f"Error: could not read {args.file}: {e}", file=sys.stderr)
        sys.exit(1)
    except (SEOGraderError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output == "json":
        write_output(json.dumps(report.to_dict(), indent=2), args.output_file)
    else:
        print_report(report, args.keyword)


def optimize_command(args):
    """Ask the configured provider for a better title and meta description."""
    from seo_grader.optimizer import SuggestionRequester

    try:
        html_content = read_html(args.file)
        requester = SuggestionRequester(
            build_llm_client(Config.from_env()),
            thresholds=load_thresholds(args),
        )
        suggestions = asyncio.run(
            requester.suggest_optimizations(html_content, args.keyword)
        )
    except OSError as e:
        print(f"Error: could not read {args.file}: {e}", file=sys.stderr)
        sys.exit(1)
    except ProviderUnavailable as e:
        print(f"Error: {e} Set LLM_API_KEY in .env file or environment.", file=sys.stderr)
        sys.exit(1)
    except SuggestionFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.suggested_title:
            print(f"  Suggested title: {e.suggested_title}", file=sys.stderr)
        if e.suggested_meta_description:
            print(f"  Suggested meta description: {e.suggested_meta_description}", file=sys.stderr)
        sys.exit(1)
    except (InvalidInput, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output == "json":
        print(json.dumps(suggestions.to_dict(), indent=2))
    else:
        print(f"\nSuggested title ({len(suggestions.suggested_title)} chars):")
        print(f"  {suggestions.suggested_title}")
        print(f"\nSuggested meta description ({len(suggestions.suggested_meta_description)} chars):")
        print(f"  {suggestions.suggested_meta_description}\n")


def thresholds_command(args):
    """Print the effective grading thresholds, optionally saving them."""
    try:
        thresholds = load_thresholds(args)
        if args.save:
            thresholds.save_to_file(args.save)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(thresholds.to_dict(), indent=2))
    if args.save:
        print(f"Thresholds written to {args.save}", file=sys.stderr)


def serve_command(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from seo_grader.api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


def main(argv=None):
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="SEO Grader - Score HTML against on-page SEO checks and suggest better copy"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging verbosity (default: LOG_LEVEL setting, else INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command parser
    analyze_parser = subparsers.add_parser(
        "analyze", help="Grade an HTML file for a target keyword."
    )
    analyze_parser.add_argument("file", help="HTML file to grade ('-' for stdin)")
    analyze_parser.add_argument("--keyword", "-k", required=True, help="Target keyword")
    analyze_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    analyze_parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (only for json format)",
    )
    analyze_parser.add_argument(
        "--thresholds",
        help="JSON file with grading thresholds",
    )
    analyze_parser.set_defaults(func=analyze_command)

    # Optimize command parser
    optimize_parser = subparsers.add_parser(
        "optimize", help="Suggest an optimized title and meta description."
    )
    optimize_parser.add_argument("file", help="HTML file to optimize ('-' for stdin)")
    optimize_parser.add_argument("--keyword", "-k", required=True, help="Target keyword")
    optimize_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    optimize_parser.add_argument(
        "--thresholds",
        help="JSON file with grading thresholds",
    )
    optimize_parser.set_defaults(func=optimize_command)

    # Thresholds command parser
    thresholds_parser = subparsers.add_parser(
        "thresholds", help="Show the effective grading thresholds."
    )
    thresholds_parser.add_argument(
        "--thresholds",
        help="JSON file with grading thresholds (default: SEO_THRESHOLD_* environment)",
    )
    thresholds_parser.add_argument(
        "--save",
        metavar="PATH",
        help="Write the thresholds to a JSON file usable with --thresholds",
    )
    thresholds_parser.set_defaults(func=thresholds_command)

    # Serve command parser
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve_parser.add_argument("--host", default=settings.HOST, help=f"Bind host (default: {settings.HOST})")
    serve_parser.add_argument(
        "--port", type=int, default=settings.PORT, help=f"Bind port (default: {settings.PORT})"
    )
    serve_parser.set_defaults(func=serve_command)

    args = parser.parse_args(argv)

    setup_logging(
        level=args.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
