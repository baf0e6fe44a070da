"""
gzstream.reader - decompress on the fly from a byte source

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from .base import StreamState, StreamIOError, CodecError
from .buffer import ByteBuffer
from .streams import CodecStream
from .codecs import codecs
from .constants import DEFAULT_CHUNK_SIZE


class DecompressingReader(CodecStream):
    """
    Readable stream that decompresses from an underlying source.

    The compressed stream may hold any number of complete members of the
    same codec, which are read as one continuous stream. Anything after the
    terminal frame of a member that is not the start of a valid member raises
    CodecError, as does a stream that ends part-way through a member.
    An empty source is an empty stream.
    """

    mode = 'r'

    def __init__(
            self, source, codec=None, *, ownership,
            chunk_size:int=DEFAULT_CHUNK_SIZE, name='', **codec_kwargs
        ):
        """
        Decompress from a byte source.

        source: object with read(size) returning b'' at end of data
        codec: codec name, Codec subclass or codec factory; detect from magic if not given
        ownership: whether close() also closes the source
        chunk_size: number of bytes to request per source read
        """
        super().__init__(
            source, codec, ownership=ownership, name=name,
            codec_kwargs=codec_kwargs,
        )
        if chunk_size < 1:
            raise ValueError(f'Chunk size must be positive, not {chunk_size}.')
        self._chunk_size = chunk_size
        self._compressed = ByteBuffer()
        self._plain = ByteBuffer()
        # codec for the member being decoded, if any
        self._codec = None
        self._eof = False
        self.members = 0
        self._state = StreamState.OPEN

    def readable(self):
        return True

    def writable(self):
        return False

    def read(self, size=-1):
        """
        Read up to `size` bytes; to the end of the stream if negative.
        Returns b'' at the end of the stream.
        """
        if size is None or size < 0:
            self._check_open()
            return self._read_all()
        return self.read1(size)

    def read1(self, size=-1):
        """Read up to `size` bytes with at most one run of source reads."""
        self._check_open()
        if size == 0:
            return b''
        self._fill()
        return self._plain.read(-1 if size is None else size)

    def peek(self, size=0):
        """Return buffered plaintext without consuming it."""
        self._check_open()
        self._fill()
        return self._plain.peek()

    def close(self):
        """Release the source. No-op if closed."""
        if self._state is StreamState.CLOSED:
            return
        logging.debug('Closing %r', self)
        self._release()

    def _read_all(self):
        chunks = [self._plain.read()]
        while not self._eof:
            self._step()
            chunks.append(self._plain.read())
        return b''.join(chunks)

    def _fill(self):
        """Decompress until plaintext is available or the stream has ended."""
        while not self._plain and not self._eof:
            self._step()

    def _step(self):
        """Run one chunk of compressed data through the codec."""
        if not self._compressed and not self._pull():
            self._end_of_source()
            return
        if self._codec is None:
            self._codec = self._start_member()
        data = self._compressed.read()
        self._plain.write(self._codec.decompress_chunk(data))
        if self._codec.is_stream_complete():
            # buffer is empty here, so this keeps the stream order
            self._compressed.write(self._codec.unused_data)
            self.members += 1
            logging.debug(
                'End of member %d on %r, %d bytes follow in buffer.',
                self.members, self, len(self._compressed)
            )
            self._codec = None

    def _pull(self):
        """Append one chunk from the source to the compressed buffer."""
        try:
            chunk = self._stream.read(self._chunk_size)
        except (OSError, ValueError) as e:
            raise StreamIOError(f'Could not read from {self.name!r}: {e}') from e
        if chunk is None:
            raise StreamIOError(f'Source {self.name!r} has no data available.')
        self._compressed.write(chunk)
        return bool(chunk)

    def _end_of_source(self):
        if self._codec is not None:
            raise CodecError(
                f'Compressed stream {self.name!r} is truncated '
                f'in member {self.members + 1}.'
            )
        self._eof = True
        logging.debug('End of stream on %r after %d member(s).', self, self.members)

    def _start_member(self):
        """Get a fresh codec, detecting it from the first member if needed."""
        if self._codec_factory is None:
            # signatures may straddle short reads
            while len(self._compressed) < codecs.magic_size and self._pull():
                pass
            self._codec_factory = codecs.identify(self._compressed.peek())
            if self._codec_factory is None:
                raise CodecError(
                    f'Could not identify compression codec of {self.name!r}.'
                )
        return self._new_codec()
