import json
from typing import BinaryIO, Iterable

import click
import polars as pl

from .models import FileOutcome

UNRESOLVED = "none"

EMPTY = "empty"

OUTPUT_ENCODING = "utf-8"


def report_error(outcome: FileOutcome) -> None:
    click.echo(f"detat: {outcome.display_path}: {outcome.error}", err=True)


def report_detection(outcome: FileOutcome) -> None:
    """Echo what the detector predicted, for --verbose."""
    det = outcome.detection
    if det is None:
        return
    click.echo(
        f"detat: {outcome.display_path}: predicted: {det.charset}, "
        f"confidence: {det.confidence}, language: {det.language}",
        err=True,
    )


def write_plain(outcome: FileOutcome, out: BinaryIO) -> None:
    """
    Write decoded text as UTF-8, or raw bytes for allowed binary input.
    Failures go to stderr and nothing is written to `out`.
    """
    if outcome.failed:
        report_error(outcome)
        return

    if outcome.raw is not None:
        out.write(outcome.raw)
    elif outcome.text is not None:
        out.write(outcome.text.encode(OUTPUT_ENCODING))


def json_record(outcome: FileOutcome) -> dict:
    """
    Build the JSON lines record for one file.

    Binary inputs carry no confidence, encoding or content.
    """
    det = outcome.detection
    binary = outcome.is_binary

    return {
        "path": outcome.path,
        "charset": det.charset if det else None,
        "confidence": det.confidence if det and not binary else None,
        "language": det.language if det else None,
        "encoding": outcome.encoding.name if outcome.encoding else None,
        "fallbacked": outcome.encoding.fallbacked if outcome.encoding else False,
        "binary": binary,
        "read_bytes": outcome.read_bytes,
        "error": str(outcome.error) if outcome.failed else None,
        "content": outcome.text if not outcome.failed else None,
    }


def write_json_line(outcome: FileOutcome, out: BinaryIO) -> None:
    line = json.dumps(json_record(outcome), ensure_ascii=False) + "\n"
    out.write(line.encode(OUTPUT_ENCODING))


def _stats_label(outcome: FileOutcome) -> str:
    if outcome.encoding:
        return outcome.encoding.name
    if outcome.read_bytes == 0 and not outcome.failed:
        return EMPTY
    return UNRESOLVED


def build_statistics(outcomes: Iterable[FileOutcome]) -> dict:
    """
    Fold all outcomes into a summary.

    Args:
        outcomes: Every FileOutcome of the run, in input order

    Returns:
        A dict with file, failure, empty, binary, fallback and byte
        totals, the number of files per resolved encoding and the
        path and message of every failed file, in input order.
    """
    rows = [
        {
            "path": o.display_path,
            "encoding": _stats_label(o),
            "failed": o.failed,
            "error": str(o.error) if o.failed else None,
            "empty": o.read_bytes == 0 and not o.failed,
            "binary": o.is_binary,
            "fallbacked": bool(o.encoding and o.encoding.fallbacked),
            "read_bytes": o.read_bytes,
        }
        for o in outcomes
    ]

    df = pl.DataFrame(
        rows,
        schema={
            "path": pl.String,
            "encoding": pl.String,
            "failed": pl.Boolean,
            "error": pl.String,
            "empty": pl.Boolean,
            "binary": pl.Boolean,
            "fallbacked": pl.Boolean,
            "read_bytes": pl.Int64,
        },
    )

    per_encoding = (
        df.group_by("encoding").agg(pl.len().alias("files")).sort("encoding")
    )

    return {
        "files": df.height,
        "failures": int(df["failed"].sum()),
        "empty": int(df["empty"].sum()),
        "binary": int(df["binary"].sum()),
        "fallbacked": int(df["fallbacked"].sum()),
        "read_bytes": int(df["read_bytes"].sum()),
        "encodings": {
            encoding: files for encoding, files in per_encoding.iter_rows()
        },
        "errors": df.filter(pl.col("failed")).select("path", "error").to_dicts(),
    }


def render_statistics(stats: dict, as_json: bool = False) -> str:
    if as_json:
        return json.dumps(stats) + "\n"

    lines = [
        f"Files: {stats['files']}",
        f"Failures: {stats['failures']}",
        f"Empty: {stats['empty']}",
        f"Binary: {stats['binary']}",
        f"Fallbacked: {stats['fallbacked']}",
        f"Bytes read: {stats['read_bytes']}",
        "Encodings:",
    ]
    lines.extend(f"  {name}: {count}" for name, count in stats["encodings"].items())
    return "\n".join(lines) + "\n"
