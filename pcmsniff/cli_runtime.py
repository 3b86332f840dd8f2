"""Command-line runtime wiring for pcmsniff."""

import argparse
import logging
import sys
from collections.abc import Sequence

from pcmsniff.app_config import DetectorConfig
from pcmsniff.detector import FileReport, detect_many


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Guess sample width, signedness and byte order of raw PCM files")
    parser.add_argument("files", nargs="+", help="Raw PCM files to classify")
    parser.add_argument("--threshold", type=float, default=None, help="Minimum best/second score ratio")
    parser.add_argument("--log-level", default=None, help="Logging level")
    parser.add_argument("--scores", action="store_true", help="Print all hypothesis scores")
    return parser


def _configure_logging(level_name: str, log_file: str = ""):
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, str(level_name or "").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=handlers,
    )


def format_report(report: FileReport) -> str:
    verdict = report.verdict
    if verdict.conclusive:
        return f"{report.path}: {verdict.pcm_type} ({verdict.pcm_type.describe()}), ratio {verdict.ratio:.2f}"
    return (
        f"{report.path}: inconclusive "
        f"(best {verdict.best.pcm_type} {verdict.best.score:.3f}, "
        f"second {verdict.runner_up.pcm_type} {verdict.runner_up.score:.3f})"
    )


def _format_scores(report: FileReport) -> str:
    return "  " + " ".join(f"{label}={score:.3f}" for label, score in report.verdict.results.as_dict().items())


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    config = DetectorConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.threshold is not None:
        try:
            config = DetectorConfig(
                threshold=args.threshold,
                blocks_per_read=config.blocks_per_read,
                log_level=config.log_level,
                log_file=config.log_file,
            )
        except ValueError as e:
            parser.error(str(e))
    _configure_logging(config.log_level, config.log_file)

    exit_code = 0
    for report in detect_many(args.files, config):
        if not report.ok:
            print(f"[ERROR] {report.path}: {report.error}", file=sys.stderr)
            exit_code = 1
            continue
        print(format_report(report))
        if args.scores:
            print(_format_scores(report))
        if not report.verdict.conclusive:
            exit_code = 1
    return exit_code


def main():
    sys.exit(run_cli())
