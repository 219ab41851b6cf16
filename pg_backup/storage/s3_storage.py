"""
Almacenamiento en S3 o compatible (MinIO, etc.)
"""
from typing import BinaryIO

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base_storage import StorageProvider
from ..exceptions import StorageError
from ..models import S3StorageSettings


class S3StorageProvider(StorageProvider):
    """Sube los backups con put_object"""

    def __init__(self, settings: S3StorageSettings, client=None):
        """
        Args:
            settings: Bucket, región, endpoint y credenciales
            client: Cliente S3 ya creado (opcional)
        """
        super().__init__()
        self.settings = settings
        self.bucket = settings.bucket
        self._client = client

    @property
    def client(self):
        """Inicialización perezosa del cliente S3"""
        if self._client is None:
            self._client = self.create_client(self.settings)
        return self._client

    @staticmethod
    def create_client(settings: S3StorageSettings):
        """
        Crea el cliente boto3 con credenciales estáticas

        Raises:
            StorageError: Si la configuración del cliente es inválida
        """
        try:
            return boto3.client(
                's3',
                region_name=settings.region or None,
                endpoint_url=settings.endpoint or None,
                aws_access_key_id=settings.access_key,
                aws_secret_access_key=settings.secret_key,
            )
        except (BotoCoreError, ValueError) as e:
            raise StorageError(f"failed to initialize S3 client: {e}") from e

    def store(self, name: str, data: BinaryIO) -> str:
        # put_object necesita un cuerpo de longitud conocida
        body = self._read_all(data)
        try:
            self.client.put_object(Bucket=self.bucket, Key=name, Body=body)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"failed to upload s3://{self.bucket}/{name}: {e}") from e
        return f"s3://{self.bucket}/{name}"

    @staticmethod
    def _read_all(data: BinaryIO) -> bytes:
        try:
            return data.read()
        except OSError as e:
            raise StorageError(f"failed to read backup payload: {e}") from e
