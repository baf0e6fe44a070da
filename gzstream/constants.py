"""
gzstream.constants - version and default settings

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

VERSION = '0.3.0'

# codec used when none is given and none can be inferred
DEFAULT_CODEC = 'gzip'

# number of bytes requested from a source per underlying read
DEFAULT_CHUNK_SIZE = 64 * 1024
# input buffered by a writer before it is pushed through the codec
DEFAULT_THRESHOLD = 64 * 1024

# consumed prefix size at which an internal buffer is compacted
COMPACT_SIZE = 256 * 1024
