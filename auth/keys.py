import logging
from contextlib import contextmanager
from dataclasses import dataclass
from os import urandom
from typing import Iterator

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from primitives.digest import encode_text
from primitives.errors import EntropySourceError

log = logging.getLogger(__name__)

# PBKDF2 PRF, fixed to HMAC-SHA1 (Rfc2898DeriveBytes default) for record compatibility.
KDF_HASH = hashes.SHA1


@dataclass
class DerivedKey:
    key: bytearray
    salt: bytes

    def wipe(self) -> None:
        for i in range(len(self.key)):
            self.key[i] = 0


def generate_salt(size: int) -> bytes:
    """Draw ``size`` bytes from the OS CSPRNG."""
    try:
        return urandom(size)
    except OSError as exc:
        raise EntropySourceError(f"secure random source failed: {exc}") from exc


def derive_key_from_password(password: str, salt: bytes, *,
                             iterations: int, key_size: int) -> DerivedKey:
    kdf = PBKDF2HMAC(algorithm=KDF_HASH(), length=key_size, salt=salt, iterations=iterations)
    key = bytearray(kdf.derive(encode_text(password)))
    return DerivedKey(key=key, salt=salt)


@contextmanager
def derived_key(password: str, salt: bytes, *, iterations: int,
                key_size: int) -> Iterator[DerivedKey]:
    """Derive a key and zero it once the block exits, including on error."""
    dk = derive_key_from_password(password, salt, iterations=iterations, key_size=key_size)
    try:
        yield dk
    finally:
        dk.wipe()
        log.debug("wiped %d-byte derived key", len(dk.key))
