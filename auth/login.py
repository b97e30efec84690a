import logging
from typing import Optional, Protocol, runtime_checkable

from primitives.compare import constant_time_equals
from primitives.digest import encode_text, keyed_digest, resolve_algorithm, salted_message
from primitives.errors import ConfigurationError
from primitives.record import SecurityRecord

from .config import HashConfiguration
from .keys import derived_key, generate_salt

log = logging.getLogger(__name__)


@runtime_checkable
class SupportsHashing(Protocol):
    def create(self, text: str) -> str: ...

    def validate(self, text: str, security: str) -> bool: ...


def compute_digest(algorithm: str, text: str, salt: bytes, iterations: int, key_size: int) -> bytes:
    """PBKDF2 the text into a key, then HMAC ``text || salt`` under that key."""
    resolve_algorithm(algorithm)  # fail before spending the KDF rounds
    with derived_key(text, salt, iterations=iterations, key_size=key_size) as dk:
        return keyed_digest(algorithm, dk.key, salted_message(encode_text(text), salt))


class Hasher:
    """Creates and checks salted, iterated, keyed password records.

    ``create`` uses the instance configuration. ``validate`` only uses the
    parameters stored in the record, so records written under an older
    configuration keep verifying after the configuration changes.
    """

    def __init__(self, config: Optional[HashConfiguration] = None):
        self._config = config
        self._checked = False

    @property
    def config(self) -> Optional[HashConfiguration]:
        return self._config

    def _require_config(self) -> HashConfiguration:
        if self._config is None:
            raise ConfigurationError("hasher has no configuration")
        if not self._checked:
            self._config.validate()
            self._checked = True
        return self._config

    def create(self, text: str) -> str:
        cfg = self._require_config()
        salt = generate_salt(cfg.salt_size)
        digest = compute_digest(cfg.algorithm, text, salt, cfg.iterations, cfg.key_size)
        log.debug("created record: algorithm=%s iterations=%d key_size=%d",
                  cfg.algorithm, cfg.iterations, cfg.key_size)
        return SecurityRecord(cfg.algorithm, cfg.iterations, cfg.key_size, salt, digest).encode()

    def validate(self, text: str, security: str) -> bool:
        record = SecurityRecord.parse(security)
        computed = compute_digest(record.algorithm, text, record.salt,
                                  record.iterations, record.key_size)
        ok = constant_time_equals(record.digest, computed)
        log.debug("validated record: algorithm=%s iterations=%d key_size=%d ok=%s",
                  record.algorithm, record.iterations, record.key_size, ok)
        return ok

    def needs_update(self, security: str) -> bool:
        """True if ``security`` was not written under the current configuration."""
        cfg = self._require_config()
        record = SecurityRecord.parse(security)
        return (record.algorithm != cfg.algorithm
                or record.iterations != cfg.iterations
                or record.key_size != cfg.key_size
                or len(record.salt) != cfg.salt_size)


_default_hasher: Optional[SupportsHashing] = None


def _get_default_hasher() -> SupportsHashing:
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = Hasher(HashConfiguration.from_env())
    return _default_hasher


def make_login_hash(password: str) -> str: return _get_default_hasher().create(password)
def verify_login_hash(password: str, stored: str) -> bool: return _get_default_hasher().validate(password, stored)
