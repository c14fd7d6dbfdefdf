"""Tools for reading the header of European Data Format (EDF) files. This
module contains:

    - Header: An immutable representation of the fixed EDF header
    - SignalHeader: An immutable representation of the per-signal header
    - read_header: Decodes a Header from a binary stream
    - read_signals: Decodes a SignalHeader from a binary stream
    - Reader: A reader of EDF header metadata
    - from_path: Reads the Header of the EDF file at a path

## Header
The Header section of an EDF file is partitioned into sequential
sections containing metadata. Each section has a specified number of
bytes used to encode an ascii string. The first 256 bytes are fixed:
```
**********************************************************************
version | patient | recording | date | time | size | reserved | ...
 8 B    |  80 B   |   80 B    | 8 B  | 8 B  | 8 B  |   44 B   | ...
**********************************************************************
```
followed by the number of data records (8 B), the record duration (8 B)
and the number of signals (4 B). The full specification of the EDF header
can be found here: https://www.edfplus.info/specs/edf.html.

The fixed section is followed by 256 bytes per signal describing each
signal's label, units, ranges and sample counts. This module decodes that
section on request but never decodes the data records themselves.

Examples:
        >>> from edfheader.file_io.edf import Reader
        >>> with Reader('recording_001.edf') as reader:
        >>>     print(reader.header)
        >>>     print(reader.signals.labels)
"""

from dataclasses import dataclass
from datetime import datetime
import logging
from pathlib import Path
from typing import BinaryIO, ClassVar, List, Optional, Tuple, Union

import numpy as np
import numpy.typing as npt

from edfheader.errors import DigitalRangeError
from edfheader.file_io import bases, bytemaps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Header:
    """The decoded fixed section of an EDF header.

    Attributes:
        patient_info:
            Free-form patient identification, trailing spaces preserved.
        recording_id:
            Free-form recording identification, trailing spaces preserved.
        start_datetime:
            The date and time the recording started.
        size:
            The number of bytes in the header as declared by the file.
        reserved:
            The 44 byte reserved field, uninterpreted.
        records_len:
            The number of data records or None if the file declares the
            count as unknown (-1).
        duration:
            The duration of each data record in whole seconds.
        signals_len:
            The number of signals in each data record.
    """

    fixed_size: ClassVar[int] = bytemaps.nbytes(bytemaps.HEADER)

    patient_info: str
    recording_id: str
    start_datetime: datetime
    size: int
    reserved: str
    records_len: Optional[int]
    duration: int
    signals_len: int

    @property
    def expected_size(self) -> int:
        """Returns the header size in bytes implied by the signal count."""

        return self.fixed_size * (self.signals_len + 1)

    def __str__(self):
        """Returns the human readable rendering of this Header."""

        records_len = -1 if self.records_len is None else self.records_len
        lines = ['## Header',
                 self.patient_info,
                 'Recording ID: {}'.format(self.recording_id),
                 'Start Time: {}'.format(self.start_datetime),
                 'Size of header: {} B'.format(self.size),
                 'Reserved: {}'.format(self.reserved),
                 '{} data records'.format(records_len),
                 '{} seconds'.format(self.duration),
                 '{} signals'.format(self.signals_len)]
        return '\n'.join(lines)


@dataclass(frozen=True)
class SignalHeader:
    """The decoded per-signal section of an EDF header.

    Each attribute is a tuple with one value per signal in file order.
    """

    labels: Tuple[str, ...]
    transducers: Tuple[str, ...]
    physical_dims: Tuple[str, ...]
    physical_mins: Tuple[float, ...]
    physical_maxes: Tuple[float, ...]
    digital_mins: Tuple[float, ...]
    digital_maxes: Tuple[float, ...]
    prefiltering: Tuple[str, ...]
    samples_per_record: Tuple[int, ...]
    reserved: Tuple[str, ...]

    def __len__(self):
        """Returns the number of signals described."""

        return len(self.labels)

    @property
    def slopes(self) -> npt.NDArray[np.float64]:
        """Returns a 1-D array of signal slopes (i.e signal gains).

        Notes:
            The EDF specification asserts that the physical values 'p' are
            linearly mapped from the integer digital values 'd' according
            to:

                p = slope * d + offset
                slope = (pmax -pmin) / (dmax - dmin)
                offset = p - slope * d for any (p,d)
        """

        pmaxes = np.array(self.physical_maxes)
        pmins = np.array(self.physical_mins)
        dmaxes = np.array(self.digital_maxes)
        dmins = np.array(self.digital_mins)
        return (pmaxes - pmins) / (dmaxes - dmins)

    @property
    def offsets(self) -> npt.NDArray[np.float64]:
        """Returns a 1-D array of signal offsets (i.e. intercepts).

        Notes:
            See slopes property for offset definition.
        """

        pmins = np.array(self.physical_mins)
        dmins = np.array(self.digital_mins)
        return pmins - self.slopes * dmins

    @property
    def record_map(self) -> List[slice]:
        """Returns a list of slice objects holding the start, stop samples
        for each signal within a data record.

        Data records in the EDF data section following the header contain
        data organized like so

        --------------------------------------------------------------
        Sig0 samples | Sig1 samples | Sig2 samples | ... | SigN samples
        --------------------------------------------------------------
        (start, stop)|(start, stop)|(start, stop)| ... |(start, stop)
        --------------------------------------------------------------
        """

        scnts = np.insert(np.array(self.samples_per_record, dtype=int), 0, 0)
        cum = np.cumsum(scnts)
        return [slice(int(a), int(b)) for a, b in zip(cum, cum[1:])]


def read_header(fp: BinaryIO, encoding: str = 'utf-8') -> Header:
    """Reads and validates the fixed section of an EDF header.

    Args:
        fp:
            A readable binary file object positioned at the start of an EDF
            file. On success it is advanced by exactly 256 bytes.
        encoding:
            The text encoding of the header fields.

    Returns:
        A Header instance.

    Raises:
        TruncatedHeaderError: if fp ends before the header is fully read.
        EncodingError: if a text field is not valid in encoding.
        InvalidVersionError: if the version field is not '0' + 7 spaces.
        FieldParseError: if the date, time or a numeric field is malformed.
        ValidationError: if the record count or duration is not accepted.
    """

    fields = {name: values[0] for name, values in
              bases.read(fp, bytemaps.HEADER, encoding).items()}

    start = datetime.combine(fields.pop('start_date'),
                             fields.pop('start_time'))
    del fields['version']
    header = Header(start_datetime=start, **fields)

    if header.size != header.expected_size:
        msg = ('Declared header size %d B does not match %d B expected for '
               '%d signals')
        logger.warning(msg, header.size, header.expected_size,
                       header.signals_len)
    return header


def read_signals(fp: BinaryIO, count: int, encoding: str = 'utf-8'
) -> SignalHeader:
    """Reads the per-signal section of an EDF header.

    Args:
        fp:
            A readable binary file object positioned at the end of the fixed
            header section (byte 256).
        count:
            The number of signals to read, usually Header.signals_len.
        encoding:
            The text encoding of the header fields.

    Returns:
        A SignalHeader instance.

    Raises:
        TruncatedHeaderError: if fp ends before the section is fully read.
        EncodingError: if a text field is not valid in encoding.
        FieldParseError: if a numeric field is malformed.
        DigitalRangeError: if a signal's digital max equals its digital
        min.
    """

    fields = bases.read(fp, bytemaps.signals(count), encoding)
    pairs = zip(fields['digital_mins'], fields['digital_maxes'])
    for idx, (dmin, dmax) in enumerate(pairs):
        if dmin == dmax:
            msg = 'Signal {} has equal digital min and max ({})'
            err = DigitalRangeError(msg.format(idx, dmin))
            err.field = 'digital_maxes'
            raise err

    return SignalHeader(**{name: tuple(vals) for name, vals in fields.items()})


class Reader(bases.Reader):
    """A reader of European Data Format (EDF) header metadata.

    The fixed header is read and validated when the Reader is created. The
    per-signal header is read on first access to 'signals'. If opened
    outside of context management, you should close this Reader's instance
    manually by calling the 'close' method.

    Attributes:
        path (Path):
            A python path instance to the EDF file.
        encoding (str):
            The text encoding of the header fields.

    Examples:
        >>> with Reader('recording_001.edf') as reader:
        >>>     print(reader.header.start_datetime)
    """

    def __init__(self, path: Union[str, Path], encoding: str = 'utf-8'
    ) -> None:
        """Extends the Reader ABC by reading the fixed header.

        A failed header read closes the opened file before the error
        propagates.
        """

        super().__init__(path, encoding)
        self._signals: Optional[SignalHeader] = None
        try:
            self._header = read_header(self._fobj, encoding)
        except Exception:
            self.close()
            raise

    @property
    def header(self) -> Header:
        """Returns the fixed Header of this Reader's EDF."""

        return self._header

    @property
    def signals(self) -> SignalHeader:
        """Returns the SignalHeader of this Reader's EDF.

        Raises:
            ValueError: if the signal header has not been read and this
            Reader is closed.
        """

        if self._signals is None:
            if self._fobj is None:
                msg = 'I/O operation on closed Reader for {}'
                raise ValueError(msg.format(self.path))
            self._fobj.seek(Header.fixed_size)
            self._signals = read_signals(self._fobj, self.header.signals_len,
                                         self.encoding)
        return self._signals


def from_path(path: Union[str, Path], encoding: str = 'utf-8') -> Header:
    """Returns the fixed Header of the EDF file at path.

    Raises:
        EDFIOError: if the file can not be opened or is truncated.
        EDFError: any other error raised by read_header.
    """

    with Reader(path, encoding) as reader:
        return reader.header
