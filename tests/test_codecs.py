"""
gzstream test suite
codec and registry tests
"""

import gzip
import unittest

import gzstream
from gzstream import Codec, CodecError, codecs
from gzstream.magic import CodecRegistry
from gzstream.codecs import zstd
from .base import BaseTester, FrameCodec, sample_data


def run_codec(codec_class, data, **kwargs):
    """Compress with one codec instance and decompress with another."""
    encoder = codec_class(**kwargs)
    compressed = encoder.compress_chunk(data) + encoder.finish_compress()
    decoder = codec_class()
    plain = decoder.decompress_chunk(compressed)
    return compressed, plain, decoder


class TestCodecs(BaseTester):
    """Test the codec adapters."""

    data = sample_data(10000)

    def test_round_trip_all(self):
        """Every registered codec returns its input."""
        for name in codecs.get_formats():
            with self.subTest(codec=name):
                _, plain, decoder = run_codec(codecs.get(name), self.data)
                self.assertEqual(plain, self.data)
                self.assertTrue(decoder.is_stream_complete())
                self.assertEqual(decoder.unused_data, b'')

    def test_empty_input(self):
        for name in codecs.get_formats():
            with self.subTest(codec=name):
                compressed, plain, decoder = run_codec(codecs.get(name), b'')
                self.assertTrue(compressed)
                self.assertEqual(plain, b'')
                self.assertTrue(decoder.is_stream_complete())

    def test_signatures(self):
        """Output starts with the registered magic."""
        for name in codecs.get_formats():
            codec_class = codecs.get(name)
            if not codec_class.magic:
                continue
            with self.subTest(codec=name):
                compressed, _, _ = run_codec(codec_class, self.data)
                self.assertTrue(compressed.startswith(codec_class.magic))

    def test_unused_data(self):
        compressed, _, _ = run_codec(codecs.get('gzip'), self.hello)
        decoder = codecs.get('gzip')()
        self.assertEqual(decoder.decompress_chunk(compressed + b'tail'), self.hello)
        self.assertTrue(decoder.is_stream_complete())
        self.assertEqual(decoder.unused_data, b'tail')

    def test_incomplete(self):
        compressed, _, _ = run_codec(codecs.get('gzip'), self.data)
        decoder = codecs.get('gzip')()
        decoder.decompress_chunk(compressed[:-4])
        self.assertFalse(decoder.is_stream_complete())
        self.assertFalse(decoder.finished)

    def test_incremental(self):
        """Feeding a byte at a time gives the same plaintext."""
        compressed, _, _ = run_codec(codecs.get('bzip2'), self.data)
        decoder = codecs.get('bzip2')()
        plain = b''.join(
            decoder.decompress_chunk(compressed[_i:_i+1])
            for _i in range(len(compressed))
        )
        self.assertEqual(plain, self.data)
        self.assertTrue(decoder.is_stream_complete())

    def test_sync_flush(self):
        """A sync flush makes all input so far decodable."""
        encoder = codecs.get('zlib')()
        partial = encoder.compress_chunk(self.hello) + encoder.flush_compress()
        decoder = codecs.get('zlib')()
        self.assertEqual(decoder.decompress_chunk(partial), self.hello)
        self.assertFalse(decoder.is_stream_complete())

    def test_unsupported_sync_flush(self):
        encoder = codecs.get('xz')()
        encoder.compress_chunk(self.hello)
        self.assertEqual(encoder.flush_compress(), b'')

    def test_use_after_finish(self):
        encoder = codecs.get('gzip')()
        encoder.finish_compress()
        self.assertTrue(encoder.finished)
        with self.assertRaises(CodecError):
            encoder.compress_chunk(b'more')
        with self.assertRaises(CodecError):
            encoder.finish_compress()

    def test_decompress_after_complete(self):
        compressed, _, decoder = run_codec(codecs.get('gzip'), self.hello)
        with self.assertRaises(CodecError):
            decoder.decompress_chunk(compressed)

    def test_one_direction(self):
        """A codec instance compresses or decompresses, not both."""
        codec = codecs.get('gzip')()
        codec.compress_chunk(b'abc')
        with self.assertRaises(CodecError):
            codec.decompress_chunk(b'abc')

    def test_bad_data(self):
        decoder = codecs.get('gzip')()
        with self.assertRaises(CodecError) as cm:
            decoder.decompress_chunk(b'not gzip data')
        self.assertIsNotNone(cm.exception.__cause__)

    def test_bad_data_fake_codec(self):
        with self.assertRaises(CodecError):
            FrameCodec().decompress_chunk(b'Xnonsense')

    def test_levels(self):
        for name, bad in (('gzip', 10), ('zlib', -2), ('bzip2', 0), ('xz', 10)):
            with self.subTest(codec=name):
                with self.assertRaises(ValueError):
                    codecs.get(name)(level=bad)

    def test_level_changes_output(self):
        fast, _, _ = run_codec(codecs.get('gzip'), self.data, level=1)
        best, _, _ = run_codec(codecs.get('gzip'), self.data, level=9)
        self.assertLessEqual(len(best), len(fast))

    def test_gzip_interop(self):
        """gzip output is a standard gzip member."""
        compressed, _, _ = run_codec(codecs.get('gzip'), self.data)
        self.assertEqual(gzip.decompress(compressed), self.data)
        decoder = codecs.get('gzip')()
        self.assertEqual(decoder.decompress_chunk(gzip.compress(self.data)), self.data)

    def test_abstract_codec(self):
        with self.assertRaises(NotImplementedError):
            Codec().compress_chunk(b'')

    @unittest.skipUnless(zstd.zstandard, 'zstandard not installed')
    def test_zstd(self):
        zstd_codec = codecs.get('zstd')
        compressed, plain, decoder = run_codec(zstd_codec, self.data, level=19)
        self.assertEqual(plain, self.data)
        self.assertTrue(decoder.is_stream_complete())
        self.assertEqual(gzstream.decompress(compressed), self.data)
        with self.assertRaises(ValueError):
            zstd_codec(level=0)

    @unittest.skipUnless(zstd.zstandard, 'zstandard not installed')
    def test_zstd_sync_flush(self):
        encoder = codecs.get('zstd')()
        partial = encoder.compress_chunk(self.hello) + encoder.flush_compress()
        decoder = codecs.get('zstd')()
        self.assertEqual(decoder.decompress_chunk(partial), self.hello)
        self.assertFalse(decoder.is_stream_complete())


class TestRegistry(unittest.TestCase):
    """Test codec lookup."""

    def test_builtin_formats(self):
        formats = codecs.get_formats()
        for name in ('gzip', 'zlib', 'deflate', 'bzip2', 'xz', 'lzma'):
            self.assertIn(name, formats)

    def test_get(self):
        self.assertIs(codecs.get('GZIP'), codecs.get('gzip'))
        with self.assertRaises(ValueError):
            codecs.get('rar')

    def test_identify(self):
        self.assertEqual(codecs.identify(b'\x1f\x8b\x08\x00').name, 'gzip')
        self.assertEqual(codecs.identify(b'BZh91AY').name, 'bzip2')
        self.assertEqual(codecs.identify(b'\xfd7zXZ\x00\x00').name, 'xz')
        self.assertIsNone(codecs.identify(b'PK\x03\x04'))
        self.assertIsNone(codecs.identify(b''))

    def test_match(self):
        self.assertEqual(codecs.match('archive.tar.GZ').name, 'gzip')
        self.assertEqual(codecs.match('dir/file.bz2').name, 'bzip2')
        self.assertEqual(codecs.match('x.txz').name, 'xz')
        self.assertIsNone(codecs.match('notes.txt'))
        self.assertIsNone(codecs.match(''))

    def test_resolve(self):
        self.assertIs(codecs.resolve('xz'), codecs.get('xz'))
        self.assertIs(codecs.resolve(FrameCodec), FrameCodec)
        with self.assertRaises(TypeError):
            codecs.resolve(42)

    def test_register(self):
        registry = CodecRegistry()

        @registry.register(name='frame', magic=(b'D', b'DE'), patterns=('*.frm',))
        class _Frame(FrameCodec):
            pass

        self.assertEqual(registry.get_formats(), ('frame',))
        self.assertEqual(registry.magic_size, 2)
        self.assertIs(registry.identify(b'Dx'), _Frame)
        self.assertIs(registry.match('a.frm'), _Frame)
        with self.assertRaises(ValueError):
            registry.register(name='frame')(FrameCodec)
        with self.assertRaises(ValueError):
            registry.register()(FrameCodec)
        with self.assertRaises(TypeError):
            registry.register(name='other', magic=b'D')(FrameCodec)


if __name__ == '__main__':
    unittest.main()
