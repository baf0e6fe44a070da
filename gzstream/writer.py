"""
gzstream.writer - compress on the fly to a byte sink

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from .base import StreamState, StreamIOError
from .buffer import ByteBuffer
from .streams import CodecStream
from .constants import DEFAULT_CODEC, DEFAULT_THRESHOLD


class CompressingWriter(CodecStream):
    """
    Writable stream that compresses to an underlying sink.

    Plaintext is collected in an input buffer and pushed through the codec
    once `threshold` bytes have accumulated. The compressed output this
    produces stays in memory when write() returns: it is forwarded to the
    sink at the start of the next write, which may be write(b''), or on
    flush() and close(). A write thus either accepts all of its bytes or
    raises before accepting any.

    close() writes the codec's terminal frame exactly once. If the writer is
    garbage collected while still open it is closed then, but errors at that
    point can only be logged; call close() or use a `with` block to see them.
    """

    mode = 'w'

    def __init__(
            self, sink, codec=DEFAULT_CODEC, *, ownership,
            threshold:int=DEFAULT_THRESHOLD, name='', **codec_kwargs
        ):
        """
        Compress to a byte sink.

        sink: object with write(bytes) and flush()
        codec: codec name, Codec subclass or codec factory (default: gzip)
        ownership: whether close() also closes the sink
        threshold: number of plaintext bytes to buffer before compressing
        codec_kwargs: options for the codec, e.g. `level`
        """
        super().__init__(
            sink, codec or DEFAULT_CODEC, ownership=ownership, name=name,
            codec_kwargs=codec_kwargs,
        )
        if threshold < 1:
            raise ValueError(f'Threshold must be positive, not {threshold}.')
        self._threshold = threshold
        self._codec = self._new_codec()
        self._input = ByteBuffer()
        self._output = ByteBuffer()
        # plaintext given to the codec since the last sync flush
        self._unflushed = False
        self._state = StreamState.OPEN

    def readable(self):
        return False

    def writable(self):
        return True

    def write(self, data):
        """Accept all of `data`; return its length."""
        self._check_open()
        # copy, the caller may reuse a mutable buffer
        data = bytes(memoryview(data))
        # report earlier sink failures before accepting anything
        self._forward()
        self._input.write(data)
        if len(self._input) >= self._threshold:
            self._compress_input()
        return len(data)

    def flush(self):
        """Push all buffered data through the codec and the sink."""
        self._check_open()
        self._compress_input()
        if self._unflushed:
            self._output.write(self._codec.flush_compress())
            self._unflushed = False
        self._forward()
        self._flush_sink()

    def close(self):
        """Write the terminal frame and release the sink. No-op if closed."""
        if self._state is StreamState.CLOSED:
            return
        logging.debug('Closing %r', self)
        self._state = StreamState.FLUSHING
        self._compress_input()
        # on a retry after failure, the trailer is already in the output buffer
        if not self._codec.finished:
            self._output.write(self._codec.finish_compress())
        self._forward()
        self._flush_sink()
        self._release()

    def _compress_input(self):
        """Drain the input buffer through the codec."""
        if not self._input:
            return
        data = self._input.read()
        self._output.write(self._codec.compress_chunk(data))
        self._unflushed = True

    def _forward(self):
        """Write the output buffer to the sink, retrying short writes."""
        while self._output:
            chunk = self._output.peek(self._threshold)
            try:
                count = self._stream.write(chunk)
            # a closed file object raises ValueError
            except (OSError, ValueError) as e:
                raise StreamIOError(
                    f'Could not write to {self.name!r}: {e}'
                ) from e
            # file-likes that don't report a count are taken to write it all
            if count is None:
                count = len(chunk)
            if not count:
                raise StreamIOError(f'Sink {self.name!r} accepted no bytes.')
            self._output.skip(count)

    def _flush_sink(self):
        try:
            self._stream.flush()
        except (OSError, ValueError) as e:
            raise StreamIOError(f'Could not flush {self.name!r}: {e}') from e
