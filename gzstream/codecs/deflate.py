"""
gzstream.codecs.deflate - deflate-based codecs through zlib

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .codec import Codec, codecs


class DeflateFamilyCodec(Codec):
    """Base class for deflate streams with different framing."""

    module = 'zlib'
    errorclass = 'error'
    # window size and framing selector, see zlib.compressobj
    wbits = -15

    def __init__(self, level:int=-1):
        """
        level: compression level 0--9, or -1 for zlib's default (6)
        """
        super().__init__()
        if not -1 <= level <= 9:
            raise ValueError(f'Compression level must be in -1..9, not {level}.')
        self.level = level

    def new_compressor(self):
        return self.library.compressobj(
            self.level, self.library.DEFLATED, self.wbits
        )

    def new_decompressor(self):
        return self.library.decompressobj(self.wbits)

    def sync_flush(self, compressor):
        return compressor.flush(self.library.Z_SYNC_FLUSH)


@codecs.register(
    name='gzip',
    magic=(b'\x1f\x8b',),
    patterns=('*.gz', '*.gzip', '*.tgz'),
)
class GzipCodec(DeflateFamilyCodec):
    """gzip member: header, deflate blocks, CRC-32 and size trailer."""
    wbits = 16 + 15


@codecs.register(
    name='zlib',
    # CMF byte 0x78 with the check bits for each FLEVEL
    magic=(b'\x78\x01', b'\x78\x5e', b'\x78\x9c', b'\x78\xda'),
    patterns=('*.zz', '*.zlib'),
)
class ZlibCodec(DeflateFamilyCodec):
    """zlib stream: two-byte header, deflate blocks, Adler-32 trailer."""
    wbits = 15


@codecs.register(
    name='deflate',
    patterns=('*.deflate',),
)
class RawDeflateCodec(DeflateFamilyCodec):
    """Bare deflate blocks without header or checksum."""
    wbits = -15
