"""Decoders that convert the raw bytes of a single EDF header field into
python values.

Every decoder accepts the bytes read for one field and the text encoding of
the file and either returns the decoded value or raises an EDFError
subclass. Decoders never consume bytes themselves; the field widths and
the order in which decoders are applied are defined in the bytemaps module.

This module contains the following decoders:

    version:        validates the 8 byte version literal
    text:           free text, preserved as-is
    stripped:       free text, trailing whitespace removed
    start_date:     DD.MM.YY dates with 1985 clipping
    start_time:     HH.MM.SS times
    unsigned:       unsigned decimal integers
    signed:         signed decimal integers
    count:          unsigned 32-bit decimal integers
    records:        data record counts with the -1 unknown sentinel
    duration:       whole second record durations
    real:           decimal floats used in the signal header
"""

from datetime import date, time
import re
from typing import Optional

from edfheader.errors import (EncodingError, FieldParseError,
                              InvalidVersionError, RecordCountError,
                              UnsupportedDurationError)

VERSION = b'0' + b' ' * 7

# two digit years below the clipping year belong to the 2000s
CLIP_YEAR = 1985

UNKNOWN_RECORDS = -1

_UNSIGNED = re.compile(r'\+?[0-9]+')
_SIGNED = re.compile(r'[+-]?[0-9]+')
_DATE = re.compile(r'([0-9]{2})\.([0-9]{2})\.([0-9]{2})')
_TIME = re.compile(r'([0-9]{2})\.([0-9]{2})\.([0-9]{2})')
_REAL = re.compile(r'[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?')


def _to_unsigned(value: str, bits: int = 64) -> int:
    """Converts an already decoded string to an unsigned integer of at most
    bits bits."""

    if not _UNSIGNED.fullmatch(value):
        msg = 'Could not parse {!r} as an unsigned integer'
        raise FieldParseError(msg.format(value))

    result = int(value)
    if result >= 2 ** bits:
        msg = 'Unsigned integer {} exceeds {} bits'
        raise FieldParseError(msg.format(result, bits))
    return result


def text(raw: bytes, encoding: str = 'utf-8') -> str:
    """Returns raw decoded to a string without altering its content.

    Raises:
        EncodingError: if raw is not valid in encoding.
    """

    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as exc:
        msg = 'Field bytes {!r} are not valid {} text'
        raise EncodingError(msg.format(raw, encoding)) from exc


def stripped(raw: bytes, encoding: str = 'utf-8') -> str:
    """Returns raw decoded to a string with trailing whitespace removed."""

    return text(raw, encoding).rstrip()


def version(raw: bytes, encoding: str = 'utf-8') -> str:
    """Validates the version field.

    The comparison is made on the raw bytes so undecodable bytes in this
    field are reported as an invalid version rather than an encoding error.

    Returns:
        The version string '0'.

    Raises:
        InvalidVersionError: if raw is not ascii '0' followed by 7 spaces.
    """

    if raw != VERSION:
        raise InvalidVersionError()
    return '0'


def unsigned(raw: bytes, encoding: str = 'utf-8', bits: int = 64) -> int:
    """Returns the unsigned integer encoded in raw.

    Trailing whitespace is ignored. An optional leading '+' is permitted;
    anything other than ascii digits is not.

    Args:
        raw:
            The field bytes.
        encoding:
            The text encoding of the field.
        bits:
            The largest value accepted is 2**bits - 1.

    Raises:
        FieldParseError: if the text is not an unsigned integer or
        overflows bits.
    """

    return _to_unsigned(text(raw, encoding).rstrip(), bits)


def signed(raw: bytes, encoding: str = 'utf-8') -> int:
    """Returns the signed integer encoded in raw ignoring trailing
    whitespace.

    Raises:
        FieldParseError: if the text is not a signed integer.
    """

    value = text(raw, encoding).rstrip()
    if not _SIGNED.fullmatch(value):
        msg = 'Could not parse {!r} as an integer'
        raise FieldParseError(msg.format(value))
    return int(value)


def count(raw: bytes, encoding: str = 'utf-8') -> int:
    """Returns the unsigned 32-bit integer encoded in raw."""

    return unsigned(raw, encoding, bits=32)


def real(raw: bytes, encoding: str = 'utf-8') -> float:
    """Returns the decimal number encoded in raw ignoring surrounding
    whitespace.

    Raises:
        FieldParseError: if the text is not a decimal number.
    """

    value = text(raw, encoding).strip()
    if not _REAL.fullmatch(value):
        msg = 'Could not parse {!r} as a number'
        raise FieldParseError(msg.format(value))
    return float(value)


def start_date(raw: bytes, encoding: str = 'utf-8') -> date:
    """Returns the recording start date from a 'DD.MM.YY' field.

    EDF stores only 2 digits of the year. Years from 85 to 99 are in the
    1900s and years from 00 to 84 are in the 2000s.

    Raises:
        FieldParseError: if the text is not a valid DD.MM.YY date.
    """

    value = text(raw, encoding)
    matched = _DATE.fullmatch(value)
    if not matched:
        msg = 'Could not parse start date {!r}, expected DD.MM.YY'
        raise FieldParseError(msg.format(value))

    day, month, year = (int(x) for x in matched.groups())
    year += 1900
    if year < CLIP_YEAR:
        year += 100

    try:
        return date(year, month, day)
    except ValueError as exc:
        msg = 'Invalid start date {!r}'
        raise FieldParseError(msg.format(value)) from exc


def start_time(raw: bytes, encoding: str = 'utf-8') -> time:
    """Returns the recording start time from a 'HH.MM.SS' field.

    Raises:
        FieldParseError: if the text is not a valid HH.MM.SS time.
    """

    value = text(raw, encoding)
    matched = _TIME.fullmatch(value)
    if not matched:
        msg = 'Could not parse start time {!r}, expected HH.MM.SS'
        raise FieldParseError(msg.format(value))

    try:
        return time(*(int(x) for x in matched.groups()))
    except ValueError as exc:
        msg = 'Invalid start time {!r}'
        raise FieldParseError(msg.format(value)) from exc


def records(raw: bytes, encoding: str = 'utf-8') -> Optional[int]:
    """Returns the number of data records or None if the count is unknown.

    Raises:
        RecordCountError: if the count is zero or negative and not -1.
    """

    value = signed(raw, encoding)
    if value == UNKNOWN_RECORDS:
        return None
    if value > 0:
        return value

    msg = 'Record length cannot be negative or zero, got {}'
    raise RecordCountError(msg.format(value))


def duration(raw: bytes, encoding: str = 'utf-8') -> int:
    """Returns the duration of a data record in whole seconds.

    A single decimal point is permitted if every digit after it is zero
    (e.g. '1.0' or '1.000'). The fractional part must be a number that fits
    in an unsigned byte.

    Raises:
        UnsupportedDurationError: if the fractional part is not zero.
        FieldParseError: if either part of the duration is malformed.
    """

    value = text(raw, encoding).rstrip()
    characteristic, point, mantissa = value.partition('.')
    if point:
        fraction = _to_unsigned(mantissa, bits=8)
        if fraction != 0:
            msg = 'Fractional record durations are not supported, got {!r}'
            raise UnsupportedDurationError(msg.format(value))

    return _to_unsigned(characteristic)
