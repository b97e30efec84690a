"""Primitives: keyed digests, constant-time comparison, security record codec."""
from .errors import (HasherError, ConfigurationError, FormatError, ParseError,
                     UnsupportedAlgorithmError, EntropySourceError)
from .digest import SUPPORTED_ALGORITHMS, resolve_algorithm, keyed_digest, salted_message, encode_text
from .compare import constant_time_equals
from .record import SecurityRecord
