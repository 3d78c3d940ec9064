from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Optional

from .encoder import detect, transcode
from .errors import BinaryRejected, DetatError, IoError
from .models import DetectionResult, FileOutcome, Settings
from .policy import resolve_encoding

Detector = Callable[[bytes], DetectionResult]

STDIN_PATH = "-"


class Detat:
    """
    Runs every input through detect -> decide -> binary check -> decode,
    one file at a time and in the order given.
    """

    def __init__(
        self,
        settings: Settings,
        detector: Optional[Detector] = None,
        stdin: Optional[BinaryIO] = None,
    ) -> None:
        self.settings = settings
        self.detector = detector or detect
        self.stdin = stdin

    def run(self) -> Iterator[FileOutcome]:
        """
        Yield one FileOutcome per configured path. With no paths the
        only input is standard input.
        """
        paths = self.settings.paths or (STDIN_PATH,)
        for path in paths:
            yield self.run_one(path)

    def run_one(self, path: str) -> FileOutcome:
        outcome = FileOutcome(path=None if path in ("", STDIN_PATH) else path)
        try:
            raw_data = self.read(outcome.path)
            outcome.read_bytes = len(raw_data)
            self.copy(raw_data, outcome)
        except DetatError as exc:
            outcome.error = exc
        return outcome

    def read(self, path: Optional[str]) -> bytes:
        """Read a whole input into memory. None reads standard input."""
        try:
            if path is None:
                return self.stdin.read() if self.stdin is not None else b""
            return Path(path).read_bytes()
        except OSError as exc:
            raise IoError(exc.strerror or str(exc)) from exc

    def copy(self, raw_data: bytes, outcome: FileOutcome) -> None:
        """Fill in the outcome for one buffer. Raises DetatError on failure."""
        settings = self.settings

        # Nothing to detect or print.
        if not raw_data:
            outcome.detection = DetectionResult(charset="", confidence=0.0)
            return

        detection = self.detector(raw_data)
        outcome.detection = detection

        # Binary input never reaches the decision policy
        if detection.is_binary:
            outcome.is_binary = True
            if not settings.allow_binary:
                raise BinaryRejected()
            outcome.raw = raw_data
            return

        outcome.encoding = resolve_encoding(
            detection, settings.confidence_min, settings.fallback_encoding
        )
        outcome.text = transcode(
            raw_data, outcome.encoding, detection.charset, settings.decoder_trap
        )
