class DetatError(Exception):
    """Base class for per-file failures. None of these abort the batch."""


class IoError(DetatError):
    """The input could not be opened or read."""


class BinaryRejected(DetatError):
    """Binary input seen while binary pass-through is disabled."""

    def __init__(self):
        super().__init__("Input is binary")


class LowConfidenceNoFallback(DetatError):
    """Detection confidence is under the threshold and no fallback was given."""

    def __init__(self, charset: str, confidence: float, confidence_min: float):
        self.charset = charset
        self.confidence = confidence
        self.confidence_min = confidence_min
        super().__init__(
            f"confidence: {confidence} < {confidence_min} (predicted: {charset})"
        )


class TranscodeError(DetatError):
    """The bytes are not valid for the resolved encoding, or it is unknown."""
