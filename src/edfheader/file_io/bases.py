"""Base tools for reading the header section of EEG files.

This module defines the bytemap driven read loop shared by all header
readers and an abstract Reader that owns an open binary file for the
duration of a read. Inheritors of Reader must supply the abstract 'header'
property to be instantiable.
"""

import abc
import logging
from pathlib import Path
import typing

from edfheader.core import mixins
from edfheader.errors import EDFError, EDFIOError, TruncatedHeaderError
from edfheader.file_io.bytemaps import Bytemap

logger = logging.getLogger(__name__)


def _read_exact(fp: typing.BinaryIO, width: int) -> bytes:
    """Reads from fp until width bytes are read or the stream ends.

    Raw and unbuffered streams may return fewer bytes than requested from
    a single read call without being at the end of the stream.
    """

    buf = b''
    while len(buf) < width:
        chunk = fp.read(width - len(buf))
        if not chunk:
            break
        buf += chunk
    return buf


def read(fp: typing.BinaryIO,
         bytemap: Bytemap,
         encoding: str = 'utf-8',
) -> typing.Dict[str, typing.List]:
    """Sequentially reads and decodes each field of a bytemap from fp.

    Reading starts at fp's current position and advances it by exactly the
    number of bytes in the bytemap. A failure at any field abandons the
    read; no partially decoded result is returned.

    Args:
        fp:
            A readable binary file object.
        bytemap:
            An ordered mapping of field names to (widths, decoder) tuples.
        encoding:
            The text encoding of the header fields.

    Returns:
        A dict keyed on field name with a list of decoded values, one per
        width in the bytemap.

    Raises:
        TruncatedHeaderError: if fp ends before a field is fully read.
        EDFError: any error raised by a decoder, tagged with the field name.
    """

    result: typing.Dict[str, typing.List] = {}
    for name, (widths, decoder) in bytemap.items():
        values = []
        for width in widths:
            raw = _read_exact(fp, width)
            if len(raw) < width:
                msg = "Expected {} bytes for field '{}' but read {}"
                err = TruncatedHeaderError(msg.format(width, name, len(raw)))
                err.field = name
                raise err

            try:
                values.append(decoder(raw, encoding))
            except EDFError as err:
                err.field = name
                raise

        logger.debug('Decoded %s: %r', name, values)
        result[name] = values
    return result


class Reader(abc.ABC, mixins.ViewInstance):
    """Abstract base class for reading EEG headers.

    All readers support opening files under context management or as an
    open file whose resources should be closed when finished.

    Attributes:
        path:
            Python path instance to an EEG file.
        encoding:
            The text encoding of the header fields.
    """

    def __init__(self, path: typing.Union[str, Path], encoding: str = 'utf-8'
    ) -> None:
        """Initialize this reader.

        Args:
            path:
                Python path instance to an EEG data file.
            encoding:
                The text encoding of the header fields.
        """

        self.path = Path(path)
        self.encoding = encoding
        self._fobj: typing.Optional[typing.BinaryIO] = None
        self.open()

    def open(self) -> None:
        """Opens the file at path for binary reading & stores the file
        object to this Reader's '_fobj' attribute.

        Raises:
            EDFIOError: if the file can not be opened.
        """

        try:
            # allow Readers to read with or without context management
            # pylint: disable-next=consider-using-with
            self._fobj = open(self.path, 'rb')
        except OSError as exc:
            msg = 'Could not open {}: {}'
            raise EDFIOError(msg.format(self.path, exc.strerror)) from exc

    @property
    @abc.abstractmethod
    def header(self):
        """Returns the decoded header of this Reader's file."""

    def __enter__(self):
        """Return reader instance as target variable of this context."""

        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """On context exit, close this reader's file object and propagate
        errors by returning None."""

        self.close()

    def close(self) -> None:
        """Close this reader instance's opened file object and destroy the
        reference to the file object."""

        if self._fobj:
            self._fobj.close()
            self._fobj = None
