"""
Proveedores de almacenamiento de backups
"""
from .base_storage import StorageProvider
from .local_storage import LocalStorageProvider
from .s3_storage import S3StorageProvider

__all__ = [
    'StorageProvider',
    'LocalStorageProvider',
    'S3StorageProvider'
]
