"""Ordered layouts of the fields in an EDF header.

The header of an EDF file is partitioned into sequential sections. Each
section spans a fixed number of bytes and holds one piece of metadata.
Below are the first two sections of an EDF header:

***************************************
* 8 bytes ** 80 bytes .................
***************************************

The first 8 bytes hold the version and the next 80 bytes hold the patient
information. A bytemap is a dict keyed on field name whose values are
(widths, decoder) tuples like so:

{'version': ([8], decoders.version), 'patient_info': ([80], decoders.text)}

Each width is the number of bytes to read relative to the last byte
position and the decoder converts those bytes to a python value. Fields
with more than one width are read once per width and decoded to a list.
Dict order is the read order.

The EDF file specification defining these layouts can be found @
https://www.edfplus.info/specs/edf.html
"""

from typing import Callable, Dict, List, Tuple

from edfheader.file_io import decoders

Bytemap = Dict[str, Tuple[List[int], Callable]]

HEADER: Bytemap = {
        'version': ([8], decoders.version),
        'patient_info': ([80], decoders.text),
        'recording_id': ([80], decoders.text),
        'start_date': ([8], decoders.start_date),
        'start_time': ([8], decoders.start_time),
        'size': ([8], decoders.unsigned),
        'reserved': ([44], decoders.text),
        'records_len': ([8], decoders.records),
        'duration': ([8], decoders.duration),
        'signals_len': ([4], decoders.count)}


def nbytes(bytemap: Bytemap) -> int:
    """Returns the total number of bytes spanned by a bytemap."""

    return sum(sum(widths) for widths, _ in bytemap.values())


def signals(num_signals: int) -> Bytemap:
    """Returns the layout of the signal section that follows the fixed
    header.

    Each field of the signal section is stored once per signal before the
    next field begins (i.e. all labels, then all transducers, ...).

    Args:
        num_signals:
            The number of signals declared in the fixed header.
    """

    return {'labels': ([16] * num_signals, decoders.stripped),
            'transducers': ([80] * num_signals, decoders.stripped),
            'physical_dims': ([8] * num_signals, decoders.stripped),
            'physical_mins': ([8] * num_signals, decoders.real),
            'physical_maxes': ([8] * num_signals, decoders.real),
            'digital_mins': ([8] * num_signals, decoders.real),
            'digital_maxes': ([8] * num_signals, decoders.real),
            'prefiltering': ([80] * num_signals, decoders.stripped),
            'samples_per_record': ([8] * num_signals, decoders.unsigned),
            'reserved': ([32] * num_signals, decoders.stripped)}
