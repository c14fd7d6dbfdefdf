import pytest

# the fixed header fields of a valid EDF with 2 signals
FIELDS = {'version': ('0', 8),
          'patient_info': ('PAT1', 80),
          'recording_id': ('REC1', 80),
          'start_date': ('02.03.95', 8),
          'start_time': ('10.00.00', 8),
          'size': ('768', 8),
          'reserved': ('', 44),
          'records_len': ('-1', 8),
          'duration': ('1', 8),
          'signals_len': ('2', 4)}

SIGNALS = {'labels': (['EEG Fpz-Cz', 'EEG Pz-Oz'], 16),
           'transducers': (['AgAgCl electrode'] * 2, 80),
           'physical_dims': (['uV'] * 2, 8),
           'physical_mins': (['-100'] * 2, 8),
           'physical_maxes': (['100'] * 2, 8),
           'digital_mins': (['-2048'] * 2, 8),
           'digital_maxes': (['2047'] * 2, 8),
           'prefiltering': (['HP:0.1Hz LP:75Hz'] * 2, 80),
           'samples_per_record': (['100', '50'], 8),
           'reserved': ([''] * 2, 32)}


def _pad(value, width):
    """Returns value as ascii bytes left justified to width."""

    raw = value if isinstance(value, bytes) else value.encode('ascii')
    return raw.ljust(width, b' ')


@pytest.fixture
def build_header():
    """Returns a function that builds the fixed header bytes of an EDF.

    Keyword arguments override the default field values by field name and
    may be str or bytes.
    """

    def build(**overrides):
        result = b''
        for name, (value, width) in FIELDS.items():
            result += _pad(overrides.get(name, value), width)
        return result

    return build


@pytest.fixture
def signal_bytes():
    """Returns the per-signal header bytes for the 2 default signals."""

    result = b''
    for values, width in SIGNALS.values():
        result += b''.join(_pad(value, width) for value in values)
    return result


@pytest.fixture
def edf_path(tmp_path, build_header, signal_bytes):
    """Writes an EDF with a complete header and 3 empty data records to a
    temporary file and returns its path."""

    fp = tmp_path.joinpath('recording.edf')
    records = bytes(2 * 150 * 3)
    fp.write_bytes(build_header(records_len='3') + signal_bytes + records)
    return fp
