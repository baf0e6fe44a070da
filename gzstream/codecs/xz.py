"""
gzstream.codecs.xz - xz and legacy lzma codecs through lzma

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .codec import Codec, codecs


class LzmaFamilyCodec(Codec):
    """Base class for lzma container formats."""

    module = 'lzma'
    errorclass = 'LZMAError'
    # container selector, name of a lzma.FORMAT_* constant
    format = 'FORMAT_XZ'

    def __init__(self, level:int=6):
        """
        level: compression preset 0--9
        """
        super().__init__()
        if not 0 <= level <= 9:
            raise ValueError(f'Compression preset must be in 0..9, not {level}.')
        self.level = level

    def new_compressor(self):
        return self.library.LZMACompressor(
            format=getattr(self.library, self.format), preset=self.level
        )

    def new_decompressor(self):
        return self.library.LZMADecompressor(
            format=getattr(self.library, self.format)
        )


@codecs.register(
    name='xz',
    magic=(b'\xFD7zXZ\x00',),
    patterns=('*.xz', '*.txz'),
)
class XZCodec(LzmaFamilyCodec):
    format = 'FORMAT_XZ'


@codecs.register(
    name='lzma',
    # the magic is a 'maybe'
    magic=(b'\x5d\0\0',),
    patterns=('*.lzma',),
)
class LzmaCodec(LzmaFamilyCodec):
    format = 'FORMAT_ALONE'
