"""Readers of the metadata stored in the header of European Data Format
(EDF) files."""

from edfheader.errors import (DigitalRangeError, EDFError, EDFIOError,
                              EncodingError, FieldParseError, HeaderError,
                              InvalidVersionError, RecordCountError,
                              TruncatedHeaderError, UnsupportedDurationError,
                              ValidationError)
from edfheader.file_io.edf import (Header, Reader, SignalHeader, from_path,
                                   read_header, read_signals)

__version__ = '0.1.0'
