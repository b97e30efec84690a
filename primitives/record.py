import base64
import binascii
from dataclasses import dataclass

from .errors import FormatError, ParseError

DELIMITER = ":"
FIELD_COUNT = 5

# Upper bounds keep PBKDF2 inside its C int and allocation limits.
MAX_ITERATIONS = 2**31 - 1
MAX_KEY_SIZE = 1024
MAX_SALT_SIZE = 1024


@dataclass(frozen=True)
class SecurityRecord:
    """Self-describing verification artifact.

    Wire form: ``algorithm:iterations:keySize:base64(salt):base64(digest)``.
    """
    algorithm: str
    iterations: int
    key_size: int
    salt: bytes
    digest: bytes

    def encode(self) -> str:
        return DELIMITER.join((
            self.algorithm,
            str(self.iterations),
            str(self.key_size),
            base64.b64encode(self.salt).decode("ascii"),
            base64.b64encode(self.digest).decode("ascii"),
        ))

    __str__ = encode

    @classmethod
    def parse(cls, security: str) -> "SecurityRecord":
        if not isinstance(security, str):
            raise FormatError(f"security record must be a string, got {type(security).__name__}")
        segments = security.split(DELIMITER)
        if len(segments) != FIELD_COUNT:
            raise FormatError(
                f"security record has {len(segments)} fields, expected {FIELD_COUNT}")
        algorithm, iterations, key_size, salt, digest = segments
        if not algorithm:
            raise ParseError("algorithm field is empty")
        digest_bytes = _parse_b64("digest", digest)
        if not digest_bytes:
            raise ParseError("digest field is empty")
        return cls(
            algorithm=algorithm,
            iterations=_parse_positive_int("iterations", iterations, MAX_ITERATIONS),
            key_size=_parse_positive_int("keySize", key_size, MAX_KEY_SIZE),
            salt=_parse_b64("salt", salt),
            digest=digest_bytes,
        )


def _parse_positive_int(field: str, raw: str, upper: int) -> int:
    # str.isdigit() accepts non-ASCII digits; the format is 1*DIGIT
    if not (raw.isascii() and raw.isdigit()):
        raise ParseError(f"{field} is not a decimal integer: {raw!r}")
    if len(raw) > len(str(upper)):
        raise ParseError(f"{field} exceeds {upper}")
    value = int(raw)
    if value < 1:
        raise ParseError(f"{field} must be positive, got {value}")
    if value > upper:
        raise ParseError(f"{field} exceeds {upper}")
    return value


def _parse_b64(field: str, raw: str) -> bytes:
    try:
        return base64.b64decode(raw.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ParseError(f"{field} is not valid base64") from exc
