from typing import Optional

from .encoder import normalize_encoding
from .errors import LowConfidenceNoFallback
from .models import DetectionResult, ResolvedEncoding


def resolve_encoding(
    detection: DetectionResult,
    confidence_min: float = 0.0,
    fallback: Optional[str] = None,
) -> ResolvedEncoding:
    """
    Decide which encoding to decode an input with.

    The detected charset is trusted when its confidence reaches
    confidence_min. Below the threshold the fallback wins no matter
    how low the confidence is. Without a fallback the input fails.

    Thresholds outside [0, 1] are accepted as given: anything <= 0
    always trusts detection, anything > 1 always needs the fallback.

    Args:
        detection (DetectionResult): What the detector reported
        confidence_min (float): Minimum confidence to trust detection
        fallback (str): Optional encoding to use below the threshold

    Returns:
        A ResolvedEncoding. Raises LowConfidenceNoFallback when there
        is nothing trustworthy to decode with.
    """
    if detection.confidence >= confidence_min:
        return ResolvedEncoding(name=normalize_encoding(detection.charset))

    if fallback:
        return ResolvedEncoding(name=normalize_encoding(fallback), fallbacked=True)

    raise LowConfidenceNoFallback(
        detection.charset, detection.confidence, confidence_min
    )
