import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from primitives.digest import resolve_algorithm
from primitives.errors import ConfigurationError, UnsupportedAlgorithmError
from primitives.record import MAX_ITERATIONS, MAX_KEY_SIZE, MAX_SALT_SIZE

log = logging.getLogger(__name__)

DEFAULTS = {
    "ALGORITHM": "HMACSHA256",
    "ITERATIONS": "10000",
    "KEY_SIZE": "32",
    "SALT_SIZE": "16",
}

MIN_RECOMMENDED_ITERATIONS = 1000

_UPPER_BOUNDS = {
    "iterations": MAX_ITERATIONS,
    "key_size": MAX_KEY_SIZE,
    "salt_size": MAX_SALT_SIZE,
}


@dataclass(frozen=True)
class HashConfiguration:
    """Parameters for creating new security records.

    The empty instance is allowed to exist; :meth:`validate` is what refuses it.
    """
    algorithm: Optional[str] = None
    iterations: int = 0
    key_size: int = 0
    salt_size: int = 0

    def validate(self) -> "HashConfiguration":
        if not self.algorithm:
            raise ConfigurationError("algorithm is not set")
        try:
            resolve_algorithm(self.algorithm)
        except UnsupportedAlgorithmError as exc:
            raise ConfigurationError(str(exc)) from exc
        for field, upper in _UPPER_BOUNDS.items():
            value = getattr(self, field)
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigurationError(f"{field} must be a positive integer, got {value!r}")
            if value > upper:
                raise ConfigurationError(f"{field} must not exceed {upper}, got {value}")
        if self.iterations < MIN_RECOMMENDED_ITERATIONS:
            log.warning("iteration count %d is below %d", self.iterations,
                        MIN_RECOMMENDED_ITERATIONS)
        return self

    def with_changes(self, **changes) -> "HashConfiguration":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = "HASHER_") -> "HashConfiguration":
        load_dotenv()

        def _get(name: str) -> str:
            value = os.getenv(prefix + name)
            if value is None:
                log.warning("%s%s not set, using default %s", prefix, name, DEFAULTS[name])
                return DEFAULTS[name]
            return value

        def _int(name: str) -> int:
            raw = _get(name)
            try:
                return int(raw)
            except ValueError:
                raise ConfigurationError(f"{prefix}{name} is not an integer: {raw!r}") from None

        return cls(
            algorithm=_get("ALGORITHM"),
            iterations=_int("ITERATIONS"),
            key_size=_int("KEY_SIZE"),
            salt_size=_int("SALT_SIZE"),
        ).validate()
