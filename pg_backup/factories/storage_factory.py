"""
Factory para crear proveedores de almacenamiento
"""
from typing import Callable, Dict
from ..exceptions import StorageError
from ..models import StorageSettings
from ..storage.base_storage import StorageProvider
from ..storage.local_storage import LocalStorageProvider
from ..storage.s3_storage import S3StorageProvider


class StorageProviderFactory:
    """Factory para crear proveedores de almacenamiento (Factory Pattern)"""

    # Mapeo de tipos a constructores
    _providers: Dict[str, Callable[[StorageSettings], StorageProvider]] = {
        'local': lambda settings: LocalStorageProvider(settings.local.path),
        's3': lambda settings: S3StorageProvider(
            settings.s3, client=S3StorageProvider.create_client(settings.s3)
        ),
    }

    @classmethod
    def create(cls, settings: StorageSettings) -> StorageProvider:
        """
        Crea el proveedor según storage.type

        Args:
            settings: Configuración de almacenamiento

        Returns:
            Instancia de StorageProvider

        Raises:
            StorageError: Si el tipo no es soportado o el cliente no se puede crear
        """
        builder = cls._providers.get(settings.type.lower())
        if builder is None:
            raise StorageError(f"invalid storage type: {settings.type}")
        return builder(settings)

    @classmethod
    def get_supported_types(cls) -> list:
        """
        Obtiene lista de tipos de almacenamiento soportados

        Returns:
            Lista de tipos soportados
        """
        return list(cls._providers.keys())
