"""
gzstream.buffer - internal byte buffer with read cursor

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .constants import COMPACT_SIZE


class ByteBuffer:
    """
    Ordered byte sequence with a read cursor and a write cursor.

    Bytes are appended at the write cursor (the end of the backing store)
    and consumed from the read cursor. The consumed prefix is dropped when
    the buffer is fully drained, or once it exceeds `compact_size`.
    """

    def __init__(self, data=b'', compact_size=COMPACT_SIZE):
        self._data = bytearray(data)
        self._pos = 0
        self._compact_size = compact_size

    def __len__(self):
        """Number of unread bytes."""
        return len(self._data) - self._pos

    def __bool__(self):
        return len(self._data) > self._pos

    def __repr__(self):
        return (
            f'<{type(self).__name__} unread={len(self)} '
            f'read_pos={self._pos} capacity={len(self._data)}>'
        )

    @property
    def read_pos(self):
        return self._pos

    @property
    def write_pos(self):
        return len(self._data)

    def write(self, data):
        """Append bytes at the write cursor."""
        self._data += data
        return len(data)

    def peek(self, size=-1):
        """Return up to `size` unread bytes without consuming them."""
        if size is None or size < 0:
            return bytes(self._data[self._pos:])
        return bytes(self._data[self._pos:self._pos+size])

    def read(self, size=-1):
        """Consume and return up to `size` bytes; all if `size` is negative."""
        data = self.peek(size)
        self.skip(len(data))
        return data

    def skip(self, count):
        """Advance the read cursor by `count` bytes."""
        if count < 0 or count > len(self):
            raise ValueError(
                f'Cannot skip {count} bytes in buffer holding {len(self)}.'
            )
        self._pos += count
        self._compact()

    def clear(self):
        """Discard all unread bytes."""
        self._data.clear()
        self._pos = 0

    def _compact(self):
        """Drop the consumed prefix."""
        if self._pos == len(self._data):
            self.clear()
        elif self._pos >= self._compact_size:
            del self._data[:self._pos]
            self._pos = 0
