"""
gzstream.files - compressed files and one-shot helpers

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import io
import logging
from pathlib import Path

from .base import Ownership
from .codecs import codecs
from .reader import DecompressingReader
from .writer import CompressingWriter
from .constants import DEFAULT_CODEC


class CompressedFile:
    """File on the filesystem that holds compressed data."""

    def __init__(self, path, codec=None):
        """
        path: location of the file
        codec: codec name or factory; if not given, inferred from the file name,
            or when reading from the file signature, or gzip when writing
        """
        if not path:
            raise ValueError('No file name or path provided.')
        self.path = Path(path)
        self.codec = codec or codecs.match(self.path)

    def __repr__(self):
        return f"<{type(self).__name__} path='{self.path}'>"

    @classmethod
    def create_file(cls, path, codec=None):
        """Create or truncate the file and return a CompressedFile for it."""
        path = Path(path)
        logging.debug('Creating file `%s`.', path)
        path.open('wb').close()
        return cls(path, codec)

    def open_for_read(self, **kwargs):
        """Open a decompressing reader on the file."""
        logging.debug("Opening file `%s` for mode 'r'.", self.path)
        stream = self.path.open('rb')
        try:
            return DecompressingReader(
                stream, self.codec,
                ownership=Ownership.OWNS, name=str(self.path), **kwargs
            )
        except Exception:
            stream.close()
            raise

    def open_for_write(self, append=False, **kwargs):
        """
        Open a compressing writer on the file.

        append: add a new member after the existing content instead of truncating
        """
        mode = 'a' if append else 'w'
        logging.debug("Opening file `%s` for mode '%s'.", self.path, mode)
        codec = self.codec
        if not codec:
            logging.warning(
                'Could not infer codec from file name `%s`; using %s.',
                self.path.name, DEFAULT_CODEC
            )
            codec = DEFAULT_CODEC
        # truncate only once the writer accepted its options
        stream = self.path.open('ab')
        try:
            writer = CompressingWriter(
                stream, codec,
                ownership=Ownership.OWNS, name=str(self.path), **kwargs
            )
        except Exception:
            stream.close()
            raise
        if not append:
            stream.seek(0)
            stream.truncate()
        return writer

    def read_all(self):
        """Return the decompressed content of the file."""
        with self.open_for_read() as reader:
            return reader.read()

    def append_to_file(self, data, **kwargs):
        """Append `data` to the decompressed content, as a new member."""
        with self.open_for_write(append=True, **kwargs) as writer:
            writer.write(data)


def write_at(file, data, pos, codec=DEFAULT_CODEC):
    """
    Replace decompressed content of a compressed file at a given offset.

    file: binary stream open for reading and writing, seekable
    data: bytes to write
    pos: offset in the decompressed content
    codec: codec of the file's content

    The content is extended with null bytes if `pos` lies beyond its end.
    The whole file is rewritten.
    """
    if pos < 0:
        raise ValueError(f'Offset must not be negative, not {pos}.')
    file.seek(0)
    with DecompressingReader(file, codec, ownership=Ownership.BORROWS) as reader:
        content = bytearray(reader.read())
    end = pos + len(data)
    if end > len(content):
        content.extend(bytes(end - len(content)))
    content[pos:end] = data
    file.seek(0)
    file.truncate()
    with CompressingWriter(file, codec, ownership=Ownership.BORROWS) as writer:
        writer.write(content)


def open(file, mode='rb', codec=None, *, encoding='utf-8', **kwargs):
    """
    Open a compressed file or stream for reading or writing.

    file: path, or binary stream; a path is closed with the returned stream,
        a stream is left open
    mode: 'r', 'w' or 'a', optionally followed by 'b' (default) or 't'
    codec: codec name or factory; inferred from file name or magic if not given
    encoding: text encoding for text modes
    """
    if not file:
        raise ValueError('No file name, path or stream provided.')
    if mode[:1] not in ('r', 'w', 'a') or set(mode[1:]) - {'b', 't'} or len(mode) > 2:
        raise ValueError(f"Invalid mode '{mode}'.")
    rw = mode[:1]
    if isinstance(file, (str, Path)):
        if rw == 'r':
            stream = CompressedFile(file, codec).open_for_read(**kwargs)
        else:
            stream = CompressedFile(file, codec).open_for_write(append=rw == 'a', **kwargs)
    elif rw == 'r':
        stream = DecompressingReader(file, codec, ownership=Ownership.BORROWS, **kwargs)
    else:
        stream = CompressingWriter(
            file, codec or DEFAULT_CODEC, ownership=Ownership.BORROWS, **kwargs
        )
    if mode.endswith('t'):
        return io.TextIOWrapper(stream, encoding=encoding)
    return stream


def compress(data, codec=DEFAULT_CODEC, **kwargs):
    """Compress bytes in one go."""
    buffer = io.BytesIO()
    with CompressingWriter(buffer, codec, ownership=Ownership.BORROWS, **kwargs) as writer:
        writer.write(data)
    return buffer.getvalue()


def decompress(data, codec=None, **kwargs):
    """Decompress bytes in one go; detect the codec if not given."""
    with DecompressingReader(
            io.BytesIO(data), codec, ownership=Ownership.BORROWS, **kwargs
        ) as reader:
        return reader.read()
