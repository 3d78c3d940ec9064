from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DetectionResult:
    """What the charset sniffer reported for one input."""

    charset: str
    confidence: float
    language: str = ""
    is_binary: bool = False


@dataclass(frozen=True)
class ResolvedEncoding:
    """The codec actually used to decode an input."""

    name: str
    fallbacked: bool = False


@dataclass(frozen=True)
class Settings:
    """
    Parsed command line options. Built once in the CLI and passed
    to the runner and the formatters; never mutated afterwards.
    """

    allow_binary: bool = False
    json_output: bool = False
    show_stats: bool = False
    confidence_min: float = 0.0
    fallback_encoding: Optional[str] = None
    decoder_trap: str = "strict"
    verbose: bool = False
    paths: tuple = ()


@dataclass
class FileOutcome:
    """
    Result of processing a single path. Exactly one of `text`,
    `raw` or `error` carries the payload, except for empty inputs
    which carry nothing.
    """

    path: Optional[str]  # None means standard input
    detection: Optional[DetectionResult] = None
    encoding: Optional[ResolvedEncoding] = None
    text: Optional[str] = None
    raw: Optional[bytes] = None
    error: Optional[Exception] = None
    read_bytes: int = 0
    is_binary: bool = False

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def display_path(self) -> str:
        return self.path if self.path is not None else "-"
