import codecs
import chardet

from .errors import TranscodeError
from .models import DetectionResult, ResolvedEncoding

# chardet labels NUL-heavy text as one of these when it finds a BOM
# or a UTF-16/32 byte pattern. Anything else containing NUL is binary.
WIDE_ENCODINGS = ("utf-16", "utf-32")

DECODER_TRAPS = ("strict", "replace", "ignore")


def detect(raw_data: bytes) -> DetectionResult:
    """
    Sniff the encoding of a byte buffer with chardet.

    Args:
        raw_data (bytes): The whole input

    Returns:
        A DetectionResult. Empty input gives an empty charset with
        zero confidence and is never flagged as binary.
    """
    if not raw_data:
        return DetectionResult(charset="", confidence=0.0)

    result = chardet.detect(raw_data)
    charset = result.get("encoding") or ""
    confidence = float(result.get("confidence") or 0.0)
    language = result.get("language") or ""

    is_binary = not charset
    if not is_binary and b"\x00" in raw_data:
        is_binary = not charset.lower().startswith(WIDE_ENCODINGS)

    return DetectionResult(
        charset=charset,
        confidence=confidence,
        language=language,
        is_binary=is_binary,
    )


def normalize_encoding(name: str) -> str:
    """
    Map a chardet or user supplied label to the Python codec name,
    e.g. "ISO-8859-1" -> "iso8859-1". Unknown labels are returned as is.
    """
    try:
        return codecs.lookup(name).name
    except LookupError:
        return name


def is_known_encoding(name: str) -> bool:
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True


def transcode(
    raw_data: bytes, encoding: ResolvedEncoding, charset: str, trap: str = "strict"
) -> str:
    """
    Decode bytes using the resolved encoding.

    Args:
        raw_data (bytes): The input bytes
        encoding (ResolvedEncoding): Codec chosen by the decision policy
        charset (str): The label the detector reported, used in messages
        trap (str): Decoder error handler, one of strict, replace, ignore

    Returns:
        The decoded text.
    """
    if not is_known_encoding(encoding.name):
        raise TranscodeError(f'no encoding: "{encoding.name}" (charset: "{charset}")')

    try:
        return raw_data.decode(encoding.name, errors=trap)
    except UnicodeDecodeError as exc:
        raise TranscodeError(str(exc)) from exc
