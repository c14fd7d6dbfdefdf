"""Exceptions raised while reading the header of an EDF file.

The hierarchy separates failures of the underlying byte source (EDFIOError),
undecodable field text (EncodingError) and header domain failures
(HeaderError). Domain failures are further split into malformed field text
(FieldParseError) and well-formed values the format or this package does
not accept (ValidationError).

    EDFError
     +- EDFIOError
     |   +- TruncatedHeaderError
     +- EncodingError
     +- HeaderError
         +- InvalidVersionError
         +- FieldParseError
         +- ValidationError
             +- RecordCountError
             +- UnsupportedDurationError
             +- DigitalRangeError
"""

from typing import Optional


class EDFError(Exception):
    """Base class of all errors raised while reading an EDF header.

    Attributes:
        field:
            The name of the header field being decoded when the error was
            raised or None if the error is not tied to a single field.
    """

    field: Optional[str] = None


class EDFIOError(EDFError, OSError):
    """The byte source could not be opened or could not supply bytes."""


class TruncatedHeaderError(EDFIOError, EOFError):
    """The byte source ended before a header field could be fully read."""


class EncodingError(EDFError, ValueError):
    """A header field's bytes are not valid text in the read encoding."""


class HeaderError(EDFError):
    """Base class for errors in the content of an EDF header."""


class InvalidVersionError(HeaderError):
    """The version field is not the EDF literal '0' + 7 spaces."""

    def __init__(self, msg: str = 'invalid version') -> None:
        super().__init__(msg)


class FieldParseError(HeaderError, ValueError):
    """A date, time or numeric field does not have the expected form."""


class ValidationError(HeaderError, ValueError):
    """A field parsed correctly but its value is not acceptable."""


class RecordCountError(ValidationError):
    """The number of data records is zero or negative but not -1."""


class UnsupportedDurationError(ValidationError):
    """The data record duration has a non-zero fractional part.

    EDF permits fractional record durations but this package reads only
    whole second durations and rejects the rest instead of rounding.
    """


class DigitalRangeError(ValidationError):
    """A signal's digital maximum equals its digital minimum so no linear
    mapping to physical values exists."""
