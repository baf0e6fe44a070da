"""
gzstream.streams - shared base for compressing and decompressing streams

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import io
import logging

from .base import Ownership, StreamState, StreamIOError
from .codecs import codecs


class CodecStream(io.BufferedIOBase):
    """
    Binary stream that runs a codec over an underlying byte stream.

    The wrapped stream is closed along with this one only if it is owned.
    A borrowed stream is flushed, if writable, and left open.

    After any operation has raised, the stream is in an unspecified state and
    close() is the only operation that may still be called.
    """

    mode = ''

    def __init__(self, stream, codec, *, ownership, name='', codec_kwargs=None):
        """
        stream: underlying binary stream or file-like object
        codec: codec name, Codec subclass or factory returning a Codec
        ownership: Ownership.OWNS or Ownership.BORROWS, or their values
        name: name for messages, taken from the stream if not given
        codec_kwargs: keyword arguments for the codec factory
        """
        super().__init__()
        # subclasses open the stream once fully initialised
        self._state = StreamState.CLOSED
        if stream is None:
            raise ValueError('No stream provided.')
        self._stream = stream
        self.ownership = Ownership(ownership)
        self.name = name or get_name(stream)
        self._codec_factory = codecs.resolve(codec) if codec else None
        self._codec_kwargs = codec_kwargs or {}

    def __repr__(self):
        """String representation."""
        return (
            f"<{type(self).__name__} name='{self.name}' mode='{self.mode}' "
            f"{self.ownership.value} state={self._state.value}>"
        )

    def __del__(self):
        """Release on garbage collection; best effort only."""
        if getattr(self, '_state', StreamState.CLOSED) is StreamState.CLOSED:
            return
        try:
            self.close()
        except Exception as e:
            logging.warning('Could not close %r on release: %s', self, e)

    @property
    def state(self):
        return self._state

    @property
    def closed(self):
        return self._state is StreamState.CLOSED

    def seekable(self):
        return False

    def _check_open(self):
        if self._state is not StreamState.OPEN:
            raise ValueError(f'I/O operation on {self._state.value} stream.')

    def _new_codec(self):
        codec = self._codec_factory(**self._codec_kwargs)
        logging.debug('Using codec %r on %r', codec, self)
        return codec

    def _release(self):
        """Close or keep open the underlying stream according to ownership."""
        try:
            if self.ownership is Ownership.OWNS:
                logging.debug('Closing underlying stream of %r', self)
                self._stream.close()
            elif self.writable():
                self._stream.flush()
        except (OSError, ValueError) as e:
            raise StreamIOError(f'Could not release {self.name!r}: {e}') from e
        self._state = StreamState.CLOSED


def get_name(stream):
    """Get stream name, if available."""
    try:
        return str(stream.name)
    except AttributeError:
        # not all streams have one (e.g. BytesIO)
        return ''
