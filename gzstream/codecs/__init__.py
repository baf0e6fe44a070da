"""
gzstream.codecs - incremental codecs around external compression libraries

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .codec import Codec, codecs
from . import deflate, bzip2, xz, zstd
