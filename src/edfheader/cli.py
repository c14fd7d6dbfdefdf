"""The edfheader command line tool.

Prints the decoded header of an EDF file:

    $ edfheader --input recording_001.edf
    $ edfheader -i recording_001.edf --signals
"""

import logging
from pathlib import Path

import click

from edfheader.errors import EDFError
from edfheader.file_io.edf import Reader


def _signal_lines(reader: Reader):
    '''Yields one summary line per signal in reader's EDF.'''

    signals = reader.signals
    for idx, (label, dim, spr) in enumerate(zip(signals.labels,
                                                signals.physical_dims,
                                                signals.samples_per_record)):
        yield '{}: {} [{}] {} samples/record'.format(idx, label, dim, spr)


@click.command()
@click.option(
    '-i',
    '--input',
    'path',
    required=True,
    metavar='INPUT_FILE',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='The input file',
)
@click.option('--signals', is_flag=True, help='Also print the signal header.')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging.')
@click.version_option(package_name='edfheader')
def main(path: Path, signals: bool, verbose: bool):
    """Read and validate the header of the EDF file INPUT_FILE."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        with Reader(path) as reader:
            click.echo(str(reader.header))
            if signals:
                click.echo('## Signals')
                for line in _signal_lines(reader):
                    click.echo(line)
    except EDFError as err:
        msg = '{}: {}'.format(type(err).__name__, err)
        raise click.ClickException(msg) from err


if __name__ == '__main__':
    main()
