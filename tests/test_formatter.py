import io
from transcoding.errors import BinaryRejected, LowConfidenceNoFallback
from transcoding.formatter import (
    build_statistics,
    json_record,
    render_statistics,
    write_plain,
)
from transcoding.models import DetectionResult, FileOutcome, ResolvedEncoding


def text_outcome(path, text, encoding="utf-8", fallbacked=False):
    return FileOutcome(
        path=path,
        detection=DetectionResult("utf-8", 0.87, "English"),
        encoding=ResolvedEncoding(encoding, fallbacked),
        text=text,
        read_bytes=len(text.encode("utf-8")),
    )


def binary_outcome(path, allowed):
    return FileOutcome(
        path=path,
        detection=DetectionResult("", 0.0, is_binary=True),
        raw=b"\x00\x01" if allowed else None,
        error=None if allowed else BinaryRejected(),
        read_bytes=2,
        is_binary=True,
    )


def test_write_plain_encodes_text_as_utf8():
    out = io.BytesIO()

    write_plain(text_outcome("a.txt", "café"), out)

    assert out.getvalue() == "café".encode("utf-8")


def test_write_plain_passes_binary_through():
    out = io.BytesIO()

    write_plain(binary_outcome("b.bin", allowed=True), out)

    assert out.getvalue() == b"\x00\x01"


def test_json_record_for_text():
    record = json_record(text_outcome("a.txt", "hello"))

    assert record == {
        "path": "a.txt",
        "charset": "utf-8",
        "confidence": 0.87,
        "language": "English",
        "encoding": "utf-8",
        "fallbacked": False,
        "binary": False,
        "read_bytes": 5,
        "error": None,
        "content": "hello",
    }


def test_json_record_for_rejected_binary():
    record = json_record(binary_outcome(None, allowed=False))

    assert record["path"] is None
    assert record["confidence"] is None
    assert record["encoding"] is None
    assert record["content"] is None
    assert record["binary"] is True
    assert record["error"] == "Input is binary"


def test_build_statistics():
    low = FileOutcome(
        path="c.txt",
        detection=DetectionResult("ascii", 0.2),
        error=LowConfidenceNoFallback("ascii", 0.2, 0.5),
        read_bytes=4,
    )
    outcomes = [
        text_outcome("a.txt", "hello"),
        text_outcome("b.txt", "hi", encoding="cp1252", fallbacked=True),
        text_outcome("d.txt", "x"),
        binary_outcome("e.bin", allowed=False),
        low,
    ]

    stats = build_statistics(outcomes)

    assert stats == {
        "files": 5,
        "failures": 2,
        "empty": 0,
        "binary": 1,
        "fallbacked": 1,
        "read_bytes": 14,
        "encodings": {"cp1252": 1, "none": 2, "utf-8": 2},
        "errors": [
            {"path": "e.bin", "error": "Input is binary"},
            {"path": "c.txt", "error": "confidence: 0.2 < 0.5 (predicted: ascii)"},
        ],
    }


def test_render_statistics_text():
    stats = {
        "files": 2,
        "failures": 0,
        "empty": 1,
        "binary": 0,
        "fallbacked": 0,
        "read_bytes": 7,
        "encodings": {"ascii": 2, "empty": 1},
        "errors": [],
    }

    assert render_statistics(stats) == (
        "Files: 2\n"
        "Failures: 0\n"
        "Empty: 1\n"
        "Binary: 0\n"
        "Fallbacked: 0\n"
        "Bytes read: 7\n"
        "Encodings:\n"
        "  ascii: 2\n"
        "  empty: 1\n"
    )


def test_empty_input_has_its_own_bucket():
    empty = FileOutcome(
        path="empty.txt", detection=DetectionResult("", 0.0), read_bytes=0
    )
    rejected = binary_outcome("b.bin", allowed=False)

    stats = build_statistics([empty, rejected])

    assert stats["empty"] == 1
    assert stats["encodings"] == {"empty": 1, "none": 1}
    assert stats["errors"] == [{"path": "b.bin", "error": "Input is binary"}]
