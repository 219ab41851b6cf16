"""
Servicio de compresión gzip en memoria
"""
import gzip
import io
import zlib
from ..exceptions import CompressionError
from ..models import CompressionResult


class CompressionService:
    """Comprime la salida del dump antes de almacenarla"""

    def __init__(self, compresslevel: int = 9):
        self.compresslevel = compresslevel

    def compress(self, data: bytes) -> CompressionResult:
        """
        Comprime data con gzip

        El encoder se cierra antes de medir el tamaño; sin el cierre
        la salida queda truncada.

        Args:
            data: Bytes originales

        Returns:
            CompressionResult con el payload y los tamaños

        Raises:
            CompressionError: Si el encoder falla
        """
        buffer = io.BytesIO()
        try:
            with gzip.GzipFile(fileobj=buffer, mode='wb', compresslevel=self.compresslevel) as encoder:
                encoder.write(data)
        except (OSError, zlib.error, MemoryError) as e:
            raise CompressionError(f"failed to compress backup: {e}") from e

        payload = buffer.getvalue()
        return CompressionResult(
            payload=payload,
            original_size=len(data),
            compressed_size=len(payload)
        )
