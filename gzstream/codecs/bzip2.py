"""
gzstream.codecs.bzip2 - bzip2 codec through bz2

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .codec import Codec, codecs


@codecs.register(
    name='bzip2',
    magic=(b'BZh',),
    patterns=('*.bz2', '*.tbz', '*.tbz2'),
)
class Bzip2Codec(Codec):
    module = 'bz2'
    # bz2 reports bad data as a generic OSError
    error = OSError

    def __init__(self, level:int=9):
        """
        level: block size in units of 100k, 1--9
        """
        super().__init__()
        if not 1 <= level <= 9:
            raise ValueError(f'Compression level must be in 1..9, not {level}.')
        self.level = level

    def new_compressor(self):
        return self.library.BZ2Compressor(self.level)

    def new_decompressor(self):
        return self.library.BZ2Decompressor()
