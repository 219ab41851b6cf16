"""
Tests para CompressionService
"""
import gzip
import os
import unittest
from unittest.mock import patch

from pg_backup.exceptions import CompressionError
from pg_backup.services.compression_service import CompressionService


class TestCompressionService(unittest.TestCase):

    def setUp(self):
        self.service = CompressionService()

    def test_round_trip(self):
        """Test comprimir y descomprimir reproduce los bytes originales"""
        for data in (b"", b"SELECT 1;\n", os.urandom(4096), "INSERT INTO t VALUES ('ñ');\n".encode("utf-8") * 1000):
            result = self.service.compress(data)
            self.assertEqual(gzip.decompress(result.payload), data)
            self.assertEqual(result.original_size, len(data))
            self.assertEqual(result.compressed_size, len(result.payload))

    def test_payload_is_finalized(self):
        """Test el stream gzip está cerrado (incluye el trailer)"""
        result = self.service.compress(b"x" * 10000)
        self.assertEqual(result.payload[:2], b"\x1f\x8b")
        self.assertLess(result.compressed_size, result.original_size)
        self.assertEqual(int.from_bytes(result.payload[-4:], "little"), 10000)

    def test_encoder_error(self):
        with patch("pg_backup.services.compression_service.gzip.GzipFile.write", side_effect=OSError("no space")):
            with self.assertRaises(CompressionError) as ctx:
                self.service.compress(b"data")
        self.assertIn("compression", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
