#!/usr/bin/env python3
"""
ATS Resume Builder - CLI Entry Point

Scores a JSON resume against a job description and exports the resume
as LaTeX, plain text, DOCX or PDF.

Usage:
    resume-ats analyze --resume resume.json --job job_description.txt
    resume-ats export --resume resume.json --format docx
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .analyzer import ATSAnalyzer
from .config import ScoringConfig, log_level
from .generator import EXPORT_FORMATS, ExportError, export_filename, render
from .logging_config import setup_logging
from .models import InvalidInputError, JobDescription, Resume, ResumeFormatError
from .report import render_report, score_bar
from .storage import ResumeStore, load_resume

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOW_SCORE = 1
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2

GOOD_SCORE = 60


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="resume-ats",
        description="ATS Resume Builder - score your resume against a job description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    resume-ats init -o resume.json
    resume-ats analyze -r resume.json -j job.txt -o report.md
    resume-ats export -r resume.json -f pdf -o output/
    resume-ats export -f docx          (uses the saved resume)
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Score a resume against a job description")
    analyze.add_argument("-r", "--resume", help="Path to resume JSON file (default: the saved resume)")
    analyze.add_argument("-j", "--job", required=True, help="Path to job description text file")
    analyze.add_argument("--title", default="", help="Job title (guessed from the posting if omitted)")
    analyze.add_argument("--company", default="", help="Company (guessed from the posting if omitted)")
    analyze.add_argument("-o", "--output", help="Write a markdown report to this path")
    analyze.add_argument("--json", action="store_true", help="Print the analysis as JSON")
    analyze.add_argument("--clamp", action="store_true", help="Clamp the score to 0-100")

    export = subparsers.add_parser("export", help="Export a resume document")
    export.add_argument("-r", "--resume", help="Path to resume JSON file (default: the saved resume)")
    export.add_argument("-f", "--format", choices=EXPORT_FORMATS, default="pdf", help="Output format (default: pdf)")
    export.add_argument("-o", "--output", default="output", help="Output directory (default: output/)")

    init = subparsers.add_parser("init", help="Write an empty resume template")
    init.add_argument("-o", "--output", help="Path of the new resume file (default: the saved resume location)")

    return parser.parse_args(argv)


def load_text(path: str) -> str:
    """Load content from a UTF-8 text file."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidInputError(f"{path} is not UTF-8 encoded: {e}") from e


def print_summary(analysis, verbose: bool = False) -> None:
    """Print a summary of the analysis."""
    sub = analysis.sub_scores

    print("\n" + "=" * 60)
    print("ATS RESUME ANALYSIS - SUMMARY")
    print("=" * 60)

    print(f"\nATS Score: [{score_bar(analysis.score)}] {analysis.score}/100 ({analysis.rating})")
    print(f"\nKeyword Density: {sub.keyword_density:.1f}%")
    print(f"Format: {sub.format_score}  Length: {sub.length_score}  "
          f"Readability: {sub.readability_score}  Structure: {analysis.structure_score}")

    print(f"\nMatched Keywords: {len(analysis.matched_keywords)}")
    print(f"Missing Keywords: {len(analysis.missing_keywords)}")

    if verbose:
        if analysis.matched_keywords:
            print("\n--- Matched Keywords ---")
            print(f"  {', '.join(analysis.matched_keywords)}")
        if analysis.missing_keywords:
            print("\n--- Missing Keywords ---")
            print(f"  {', '.join(analysis.missing_keywords)}")

    if analysis.suggestions:
        print("\n--- Suggestions ---")
        for suggestion in analysis.suggestions:
            print(f"  - {suggestion}")

    print("\n" + "=" * 60)


def run_analyze(args: argparse.Namespace) -> int:
    resume = load_resume(ResumeStore(args.resume).path)
    job = JobDescription.from_text(load_text(args.job), title=args.title, company=args.company).validate()

    config = ScoringConfig.from_env()
    if args.clamp:
        config = config.with_clamp(True)

    analysis = ATSAnalyzer(config).analyze(resume, job)

    if args.json:
        print(json.dumps(analysis.to_dict(), indent=2))
    else:
        print(f"Analyzing resume for: {job.title} at {job.company}")
        print_summary(analysis, args.verbose)

    if args.output:
        report_path = Path(args.output)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(render_report(analysis, job), encoding="utf-8")
        print(f"\nSaving report: {report_path}")

    return EXIT_OK if analysis.score >= GOOD_SCORE else EXIT_LOW_SCORE


def run_export(args: argparse.Namespace) -> int:
    resume = load_resume(ResumeStore(args.resume).path)
    content = render(resume, args.format)

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(resume, args.format)
    path.write_bytes(content)

    print(f"Saved {args.format.upper()} resume: {path}")
    return EXIT_OK


def run_init(args: argparse.Namespace) -> int:
    store = ResumeStore(args.output)
    if store.exists():
        print(f"Error: {store.path} already exists", file=sys.stderr)
        return EXIT_FAILURE
    path = store.save(Resume())
    print(f"Created empty resume: {path}")
    return EXIT_OK


COMMANDS = {
    "analyze": run_analyze,
    "export": run_export,
    "init": run_init,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else log_level())

    try:
        return COMMANDS[args.command](args)
    except (InvalidInputError, ResumeFormatError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except ExportError as e:
        print(f"Error: {e}. Please try again.", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
