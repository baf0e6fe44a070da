"""
gzstream.codecs.zstd - Zstandard codec through the zstandard package

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

try:
    import zstandard
except ImportError:
    zstandard = None

from .codec import Codec, codecs


if zstandard:

    @codecs.register(
        name='zstd',
        magic=(b'\x28\xb5\x2f\xfd',),
        patterns=('*.zst', '*.zstd', '*.tzst'),
    )
    class ZstdCodec(Codec):
        """Zstandard frame."""

        library = zstandard
        error = zstandard.ZstdError

        def __init__(self, level:int=3):
            """
            level: compression level 1--22
            """
            super().__init__()
            if not 1 <= level <= 22:
                raise ValueError(f'Compression level must be in 1..22, not {level}.')
            self.level = level

        def new_compressor(self):
            return self.library.ZstdCompressor(level=self.level).compressobj()

        def new_decompressor(self):
            return self.library.ZstdDecompressor().decompressobj()

        def sync_flush(self, compressor):
            return compressor.flush(self.library.COMPRESSOBJ_FLUSH_BLOCK)
