"""
Modelos de datos del sistema
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from croniter import croniter

from .config import Config
from .exceptions import BackupError


@dataclass(frozen=True)
class DatabaseSettings:
    """Conexión al servidor PostgreSQL"""
    host: str
    user: str
    port: int = Config.DEFAULT_PORT
    password: str = ""
    databases: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validación después de inicialización"""
        if not self.host:
            raise ValueError("database host is required")
        if not self.user:
            raise ValueError("database user is required")
        if not 0 < self.port < 65536:
            raise ValueError(f"database port out of range: {self.port}")


@dataclass(frozen=True)
class LocalStorageSettings:
    path: str = ""


@dataclass(frozen=True)
class S3StorageSettings:
    bucket: str = ""
    region: str = ""
    endpoint: str = ""
    access_key: str = ""
    secret_key: str = ""


@dataclass(frozen=True)
class StorageSettings:
    """Selección del backend de almacenamiento"""
    type: str
    local: LocalStorageSettings = field(default_factory=LocalStorageSettings)
    s3: S3StorageSettings = field(default_factory=S3StorageSettings)

    def __post_init__(self):
        if not self.type:
            raise ValueError("storage type is required")
        if self.type not in Config.SUPPORTED_STORAGE_TYPES:
            raise ValueError(f"invalid storage type: {self.type}")
        if self.type == "local" and not self.local.path:
            raise ValueError("local storage path is required")
        if self.type == "s3" and not (
            self.s3.bucket and self.s3.endpoint and self.s3.access_key and self.s3.secret_key
        ):
            raise ValueError("s3 bucket, endpoint, access key and secret key are required")


@dataclass(frozen=True)
class AppSettings:
    """Configuración completa y validada de la aplicación"""
    database: DatabaseSettings
    storage: StorageSettings
    schedule: str
    log_file: str
    run_on_start: bool = False
    full_dump: bool = False
    retention_days: int = Config.DEFAULT_RETENTION_DAYS
    health_check_port: int = Config.DEFAULT_HEALTH_CHECK_PORT
    dump_timeout_seconds: Optional[int] = Config.DUMP_TIMEOUT_SECONDS

    def __post_init__(self):
        """Validación después de inicialización"""
        if not self.schedule:
            raise ValueError("schedule is required")
        if not croniter.is_valid(self.schedule):
            raise ValueError(f"invalid cron schedule: {self.schedule}")
        if not self.log_file:
            raise ValueError("log file is required")
        if self.retention_days < 1:
            raise ValueError("retention_days must be greater than 0")
        if not 0 < self.health_check_port < 65536:
            raise ValueError(f"health_check_port out of range: {self.health_check_port}")
        if self.dump_timeout_seconds is not None and self.dump_timeout_seconds <= 0:
            raise ValueError("dump_timeout_seconds must be greater than 0")


@dataclass(frozen=True)
class BackupTarget:
    """Objetivo de un backup: el servidor completo o una base de datos"""
    name: Optional[str] = None

    @classmethod
    def server(cls) -> "BackupTarget":
        return cls(None)

    @classmethod
    def database(cls, name: str) -> "BackupTarget":
        if not name:
            raise ValueError("database name is required")
        return cls(name)

    @property
    def is_server(self) -> bool:
        return self.name is None

    @property
    def label(self) -> str:
        return "entire server" if self.is_server else self.name

    def artifact_name(self, moment: datetime) -> str:
        """
        Genera el nombre del archivo de backup

        Dos llamadas en el mismo segundo producen el mismo nombre
        (el archivo anterior se sobrescribe).

        Args:
            moment: Momento del backup

        Returns:
            Nombre del artefacto, p.ej. app_2024-01-31_02-00-00.sql.gz
        """
        if self.is_server:
            prefix = Config.FULL_DUMP_PREFIX
        else:
            # el nombre nunca debe crear subdirectorios en el destino
            prefix = self.name.replace("/", "_").replace("\\", "_")
        timestamp = moment.strftime(Config.ARTIFACT_TIMESTAMP_FORMAT)
        return f"{prefix}_{timestamp}{Config.ARTIFACT_SUFFIX}"

    def __str__(self):
        return self.label


@dataclass
class DumpResult:
    """Salida de la herramienta de dump (solo en memoria)"""
    target: BackupTarget
    success: bool
    output: bytes = b""
    diagnostics: str = ""
    duration_seconds: float = 0.0
    error: Optional[str] = None


@dataclass
class CompressionResult:
    payload: bytes
    original_size: int
    compressed_size: int

    @property
    def ratio(self) -> float:
        """Porcentaje del tamaño comprimido respecto al original"""
        if not self.original_size:
            return 0.0
        return self.compressed_size / self.original_size * 100


@dataclass
class BackupResult:
    """Resultado del backup de un objetivo"""
    database_name: str
    success: bool
    output_file: Optional[str] = None
    error: Optional[str] = None
    duration_seconds: float = 0.0
    original_size: int = 0
    compressed_size: int = 0

    def __str__(self):
        if self.success:
            return f"✓ {self.database_name}: {self.output_file} ({self.duration_seconds:.2f}s)"
        else:
            return f"✗ {self.database_name}: {self.error}"


@dataclass
class CycleResult:
    """Resultado de un ciclo completo de backup"""
    processed_count: int = 0
    results: List[BackupResult] = field(default_factory=list)
    error: Optional[BackupError] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class StatusSnapshot:
    """Estadísticas publicadas por /status"""
    started_at: datetime
    last_backup: Optional[datetime] = None
    next_backup: Optional[datetime] = None
    backup_count: int = 0
    database_count: int = 0
