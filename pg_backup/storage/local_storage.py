"""
Almacenamiento en el sistema de archivos local
"""
import shutil
from pathlib import Path
from typing import BinaryIO
from .base_storage import StorageProvider
from ..exceptions import StorageError


class LocalStorageProvider(StorageProvider):
    """Escribe los backups en <base_path>/<name>"""

    DIRECTORY_MODE = 0o755

    def __init__(self, base_path):
        super().__init__()
        self.base_path = Path(base_path)

    def store(self, name: str, data: BinaryIO) -> str:
        output_file = self.base_path / name
        try:
            self.base_path.mkdir(mode=self.DIRECTORY_MODE, parents=True, exist_ok=True)
            # Sobrescribe un archivo existente con el mismo nombre
            with open(output_file, 'wb') as f:
                shutil.copyfileobj(data, f)
        except OSError as e:
            raise StorageError(f"failed to write {output_file}: {e}") from e
        return str(output_file)
