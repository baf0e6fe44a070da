"""
gzstream.codecs.codec - incremental codec base class

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from contextlib import contextmanager
from importlib import import_module

from ..base import CodecError
from ..magic import CodecRegistry


codecs = CodecRegistry()


class Codec:
    """
    Adapter around an external incremental compression library.

    One instance handles a single member in one direction. The compressor and
    decompressor objects follow the protocol of zlib's compressobj and
    decompressobj: `compress`, `flush`, `decompress`, `eof`, `unused_data`.
    Once the terminal frame has been produced or consumed, the instance is
    spent and further calls raise CodecError.
    """

    # set by registration
    name = ''
    magic = ()
    patterns = ()
    # external library
    library = None
    # error raised by the library on bad data
    error = Exception
    # late import machinery
    module = ''
    errorclass = ''

    def __init__(self):
        self._ensure_imports()
        self.finished = False
        self._compressor = None
        self._decompressor = None

    def __repr__(self):
        return f"<{type(self).__name__}{' [finished]' if self.finished else ''}>"

    @classmethod
    def _ensure_imports(cls):
        """Late import of compression library."""
        if cls.module:
            cls.library = import_module(cls.module)
            cls.module = ''
        if cls.errorclass:
            cls.error = getattr(cls.library, cls.errorclass)
            cls.errorclass = ''

    def new_compressor(self):
        """Create the library's incremental compressor."""
        raise NotImplementedError

    def new_decompressor(self):
        """Create the library's incremental decompressor."""
        raise NotImplementedError

    def sync_flush(self, compressor):
        """Flush compressor output up to a byte boundary without finishing."""
        # not all libraries support this; their output stays buffered
        return b''

    @contextmanager
    def _translate_errors(self):
        """Context wrapper to convert library-specific errors to ours."""
        try:
            yield
        except self.error as e:
            raise CodecError(f'{self.name or type(self).__name__}: {e}') from e

    def _check_usable(self):
        if self.finished:
            raise CodecError(f'{self!r} used after its terminal frame.')

    def _get_compressor(self):
        if self._decompressor is not None:
            raise CodecError(f'{self!r} is already in use for decompression.')
        if self._compressor is None:
            self._compressor = self.new_compressor()
        return self._compressor

    def _get_decompressor(self):
        if self._compressor is not None:
            raise CodecError(f'{self!r} is already in use for compression.')
        if self._decompressor is None:
            self._decompressor = self.new_decompressor()
        return self._decompressor

    def compress_chunk(self, data):
        """Feed plaintext; return whatever compressed output is ready."""
        self._check_usable()
        compressor = self._get_compressor()
        with self._translate_errors():
            return compressor.compress(data)

    def flush_compress(self):
        """Return output for all input so far, keeping the member open."""
        self._check_usable()
        compressor = self._get_compressor()
        with self._translate_errors():
            return self.sync_flush(compressor)

    def finish_compress(self):
        """Return remaining output including the terminal frame."""
        self._check_usable()
        compressor = self._get_compressor()
        with self._translate_errors():
            trailer = compressor.flush()
        self.finished = True
        logging.debug('%s member finished with %d trailing bytes.', self.name, len(trailer))
        return trailer

    def decompress_chunk(self, data):
        """Feed compressed data; return whatever plaintext is ready."""
        self._check_usable()
        decompressor = self._get_decompressor()
        with self._translate_errors():
            plain = decompressor.decompress(data)
        if decompressor.eof:
            self.finished = True
        return plain

    def is_stream_complete(self):
        """The terminal frame of the member has been consumed."""
        return self._decompressor is not None and self._decompressor.eof

    @property
    def unused_data(self):
        """Bytes fed after the end of the terminal frame."""
        if self._decompressor is None:
            return b''
        return self._decompressor.unused_data
