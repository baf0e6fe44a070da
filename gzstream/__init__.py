"""
gzstream - transparent compression for byte streams

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys as _sys
assert _sys.version_info >= (3, 9)

from .constants import VERSION as __version__
from .base import StreamError, CodecError, StreamIOError, Ownership, StreamState
from .codecs import Codec, codecs
from .reader import DecompressingReader
from .writer import CompressingWriter
from .files import CompressedFile, write_at, open, compress, decompress
