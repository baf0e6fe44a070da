"""
Compress, decompress and check compressed files
(c) 2024 Rob Hagemans, licence: https://opensource.org/licenses/MIT
"""

import sys
import shutil
import logging
from pathlib import Path
from contextlib import nullcontext

import gzstream
from gzstream.codecs import codecs
from gzstream.constants import DEFAULT_CODEC, DEFAULT_CHUNK_SIZE
from gzstream.plumbing import (
    wrap_main, parse_subcommands, convert_arguments, print_help,
    GLOBAL_ARG_PREFIX,
)

script_name = 'gzstream'

# file name for standard input or output
STDIO = '-'


def _open_input(infile):
    """Open plain input file, or wrap stdin without taking ownership."""
    if infile == STDIO:
        return nullcontext(sys.stdin.buffer)
    return open(infile, 'rb')

def _open_output(outfile, overwrite):
    """Open plain output file, or wrap stdout without taking ownership."""
    if outfile == STDIO:
        return nullcontext(sys.stdout.buffer)
    _check_overwrite(outfile, overwrite)
    return open(outfile, 'wb')

def _check_overwrite(outfile, overwrite):
    if not overwrite and Path(outfile).exists():
        raise FileExistsError(
            f'Use option `-overwrite` to replace existing file `{outfile}`.'
        )

def _suffix(codec):
    """Preferred file name suffix for codec."""
    codec_class = codecs.get(codec or DEFAULT_CODEC)
    return codec_class.patterns[0][1:] if codec_class.patterns else f'.{codec_class.name}'


def compress(infile=STDIO, outfile='', codec:str='', level:int=None, append:bool=False, overwrite:bool=False):
    """
    Compress a file or standard input.

    codec: compression codec (default: from output file name, or gzip)
    level: compression level (default: codec default)
    append: add a member to an existing compressed file
    overwrite: replace an existing output file
    """
    if not outfile:
        outfile = STDIO if infile == STDIO else f'{infile}{_suffix(codec)}'
    kwargs = {} if level is None else dict(level=level)
    if outfile == STDIO:
        outstream = gzstream.open(sys.stdout.buffer, 'wb', codec or DEFAULT_CODEC, **kwargs)
    else:
        if not append:
            _check_overwrite(outfile, overwrite)
        outstream = gzstream.open(outfile, 'ab' if append else 'wb', codec or None, **kwargs)
    logging.debug('Compressing `%s` to `%s`.', infile, outfile)
    with _open_input(infile) as instream:
        with outstream:
            shutil.copyfileobj(instream, outstream, DEFAULT_CHUNK_SIZE)


def decompress(infile=STDIO, outfile='', codec:str='', overwrite:bool=False):
    """
    Decompress a file or standard input.

    codec: compression codec (default: from file signature)
    overwrite: replace an existing output file
    """
    if not outfile:
        if infile == STDIO:
            outfile = STDIO
        elif codecs.match(infile) and Path(infile).suffix:
            outfile = str(Path(infile).with_suffix(''))
        else:
            raise ValueError(
                f'Cannot derive output file name from `{infile}`; please provide one.'
            )
    source = sys.stdin.buffer if infile == STDIO else infile
    logging.debug('Decompressing `%s` to `%s`.', infile, outfile)
    with gzstream.open(source, 'rb', codec or None) as instream:
        with _open_output(outfile, overwrite) as outstream:
            shutil.copyfileobj(instream, outstream, DEFAULT_CHUNK_SIZE)


def check(*infiles, codec:str=''):
    """
    Check integrity of compressed files.

    codec: compression codec (default: from file signature)
    """
    if not infiles:
        raise ValueError('No files to check.')
    for infile in infiles:
        size = 0
        with gzstream.open(infile, 'rb', codec or None) as reader:
            while True:
                data = reader.read(DEFAULT_CHUNK_SIZE)
                if not data:
                    break
                size += len(data)
            members = reader.members
        print(f'{infile}: OK, {size} bytes in {members} member(s)')


def list_codecs():
    """List available compression codecs."""
    for name in codecs.get_formats():
        codec_class = codecs.get(name)
        print(f"{name}\t{' '.join(codec_class.patterns)}".expandtabs(12))


operations = {
    'compress': compress,
    'decompress': decompress,
    'test': check,
    'codecs': list_codecs,
}

global_options = {
    'help': (bool, 'Print a help message and exit.'),
    'version': (bool, 'Show gzstream version and exit.'),
    'debug': (bool, 'Enable debugging output.'),
}

usage = (
    f'usage: {script_name} '
    + ' '.join(f'[{GLOBAL_ARG_PREFIX}{_op}]' for _op in global_options)
    + ' COMMAND [INFILE] [OUTFILE] [OPTION...]'
)


def main(argv=None):
    command_args, global_args = parse_subcommands(
        operations, global_options=global_options, argv=argv
    )
    debug = bool(global_args.kwargs.get('debug'))
    with wrap_main(debug):
        if global_args.kwargs.get('help'):
            print_help(usage, operations, global_options)

        elif global_args.kwargs.get('version'):
            print(f'gzstream v{gzstream.__version__}')

        elif not any(_args.command for _args in command_args):
            if command_args[0].args or command_args[0].kwargs:
                raise ValueError(
                    f'Unknown command `{(command_args[0].args or [""])[0]}`; '
                    f"expected one of {', '.join(operations)}."
                )
            print_help(usage, operations, global_options)

        else:
            for args in command_args:
                if not args.command:
                    continue
                logging.debug('Executing command `%s`', args.command)
                kwargs = convert_arguments(args.func, args.kwargs)
                args.func(*args.args, **kwargs)


if __name__ == '__main__':
    main()
