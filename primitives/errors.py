class HasherError(Exception):
    """Base class for every failure raised while creating or checking a record."""


class ConfigurationError(HasherError, ValueError):
    """The hash configuration is incomplete or invalid."""


class FormatError(HasherError, ValueError):
    """A security record does not have the expected field layout."""


class ParseError(HasherError, ValueError):
    """A security record field could not be decoded."""


class UnsupportedAlgorithmError(HasherError, ValueError):
    """The keyed digest algorithm is not known."""


class EntropySourceError(HasherError, OSError):
    """The secure random source failed to produce bytes."""
