"""
Excepciones del sistema de backup
"""
from typing import Optional


class BackupError(Exception):
    """Error base del sistema de backup"""


class ConfigError(BackupError):
    """Error al cargar o validar la configuración (fatal al iniciar)"""


class BackupStageError(BackupError):
    """Fallo en una fase del ciclo de backup"""

    stage = "backup"

    def __init__(self, reason: str, target: Optional[str] = None):
        super().__init__(reason)
        self.reason = (reason or "").strip() or "unknown error"
        self.target = target

    def __str__(self):
        if self.target:
            return f"{self.stage} stage failed for {self.target}: {self.reason}"
        return f"{self.stage} stage failed: {self.reason}"


class DiscoveryError(BackupStageError):
    stage = "discovery"


class DumpError(BackupStageError):
    stage = "dump"


class CompressionError(BackupStageError):
    stage = "compression"


class StorageError(BackupStageError):
    stage = "storage"


class BackupInProgressError(BackupError):
    """Se rechaza un ciclo porque ya hay otro en ejecución"""


class BackupServiceUnavailableError(BackupError):
    """No hay servicio de backup conectado"""
