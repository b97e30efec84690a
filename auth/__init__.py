"""Auth package: salted, iterated, keyed password records (PBKDF2 + HMAC)."""
from primitives.errors import (HasherError, ConfigurationError, FormatError, ParseError,
                               UnsupportedAlgorithmError, EntropySourceError)
from .keys import DerivedKey, generate_salt, derive_key_from_password, derived_key
from .config import HashConfiguration
from .login import Hasher, SupportsHashing, compute_digest, make_login_hash, verify_login_hash
