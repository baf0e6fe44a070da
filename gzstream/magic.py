"""
gzstream.magic - codec recognition by name, signature and file name

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path
from fnmatch import fnmatch


class CodecRegistry:
    """Retrieve codecs through names, magic sequences and name patterns."""

    def __init__(self):
        """Set up registry."""
        self._magic = []
        self._patterns = []
        self._names = {}

    def get_formats(self):
        """Get tuple of all registered codec names."""
        return tuple(self._names.keys())

    @property
    def magic_size(self):
        """Number of leading bytes needed to match the longest signature."""
        return max((len(_m) for _m, _ in self._magic), default=0)

    def register(self, name='', magic=(), patterns=()):
        """
        Decorator to register codec class.

        name: unique name of the codec
        magic: signatures at the start of a compressed stream
        patterns: filename patterns for this codec
        """

        def _decorator(codec):
            if not name:
                raise ValueError('No registration name given')
            if name in self._names:
                raise ValueError(
                    f'Registration name `{name}` '
                    f'already in use for {self._names[name]}'
                )
            if not isinstance(magic, (list, tuple)):
                raise TypeError(
                    'Registration parameter `magic` must be list or tuple'
                )
            if not isinstance(patterns, (list, tuple)):
                raise TypeError(
                    'Registration parameter `patterns` must be list or tuple'
                )
            codec.name = name
            codec.magic = magic
            codec.patterns = patterns
            self._names[name] = codec
            for sequence in magic:
                self._magic.append((sequence, codec))
            # sort the magic registry long to short to manage conflicts
            self._magic.sort(key=lambda _i: len(_i[0]), reverse=True)
            for pattern in patterns:
                self._patterns.append((pattern, codec))
            return codec

        return _decorator

    def get(self, name):
        """Get codec class by registered name."""
        try:
            return self._names[name.lower()]
        except KeyError:
            raise ValueError(
                f'Unknown codec `{name}`; '
                f"expected one of {', '.join(self._names)}."
            ) from None

    def identify(self, data):
        """Get codec class whose signature starts `data`, or None."""
        for magic, codec in self._magic:
            if data.startswith(magic):
                logging.debug(
                    'Data matches signature for codec `%s`.', codec.name
                )
                return codec
        return None

    def match(self, path):
        """Get codec class whose pattern matches the file name, or None."""
        if not path:
            return None
        name = Path(path).name.lower()
        for pattern, codec in self._patterns:
            if fnmatch(name, pattern):
                logging.debug(
                    'Filename `%s` matches pattern for codec `%s`.',
                    name, codec.name
                )
                return codec
        return None

    def resolve(self, codec):
        """Turn a codec name, class or factory into a factory."""
        if isinstance(codec, str):
            return self.get(codec)
        if callable(codec):
            return codec
        raise TypeError(
            'Codec must be a registered name or a callable returning a codec, '
            f'not {type(codec).__name__}.'
        )
