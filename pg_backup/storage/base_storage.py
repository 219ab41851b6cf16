"""
Interfaz de almacenamiento de backups
"""
from abc import ABC, abstractmethod
from typing import BinaryIO
from ..logger import LoggerService


class StorageProvider(ABC):
    """Almacena un flujo de bytes con un nombre"""

    def __init__(self):
        self.logger = LoggerService.get_logger(self.__class__.__name__)

    @abstractmethod
    def store(self, name: str, data: BinaryIO) -> str:
        """
        Guarda el contenido completo de data bajo el nombre indicado

        Debe consumir data por completo antes de retornar.

        Args:
            name: Nombre del artefacto
            data: Flujo de bytes a guardar

        Returns:
            Ubicación final del artefacto

        Raises:
            StorageError: Si falla la escritura o la subida
        """
        pass
