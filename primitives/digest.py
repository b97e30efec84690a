import re

from cryptography.hazmat.primitives import hashes, hmac

from .errors import UnsupportedAlgorithmError

# Names follow the .NET KeyedHashAlgorithm registry so stored records stay portable.
SUPPORTED_ALGORITHMS = {
    "HMACSHA256": hashes.SHA256,
    "HMACSHA384": hashes.SHA384,
    "HMACSHA512": hashes.SHA512,
    "HMACSHA1": hashes.SHA1,
    "HMACMD5": hashes.MD5,
    "HMAC": hashes.SHA1,
}

_QUALIFIED_PREFIX = "System.Security.Cryptography."
_SURROGATE = re.compile("[\ud800-\udfff]")
_SURROGATE_PAIR = re.compile("([\ud800-\udbff])([\udc00-\udfff])")


def resolve_algorithm(name: str) -> hashes.HashAlgorithm:
    """Map a keyed-digest name to a fresh hash instance for HMAC."""
    key = name
    if isinstance(key, str) and key.startswith(_QUALIFIED_PREFIX):
        key = key[len(_QUALIFIED_PREFIX):]
    try:
        return SUPPORTED_ALGORITHMS[key]()
    except (KeyError, TypeError):
        raise UnsupportedAlgorithmError(f"unsupported keyed digest algorithm: {name!r}") from None


def _join_pair(m) -> str:
    hi, lo = m.group(1), m.group(2)
    return chr(0x10000 + ((ord(hi) - 0xD800) << 10) + (ord(lo) - 0xDC00))


def encode_text(text: str) -> bytes:
    """UTF-8 encode, replacing lone surrogates with U+FFFD like .NET Encoding.UTF8."""
    if _SURROGATE.search(text):
        # join well-formed pairs first, then replace what is left
        text = _SURROGATE_PAIR.sub(_join_pair, text)
        text = _SURROGATE.sub("\ufffd", text)
    return text.encode("utf-8")


def salted_message(text: bytes, salt: bytes) -> bytes:
    # text first, salt appended
    return bytes(text) + bytes(salt)


def keyed_digest(algorithm: str, key: bytes, message: bytes) -> bytes:
    h = hmac.HMAC(key, resolve_algorithm(algorithm))
    h.update(message)
    return h.finalize()
