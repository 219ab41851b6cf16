"""
Configuración centralizada del sistema de backup
"""
import logging
from pathlib import Path


class Config:
    """Constantes y valores por defecto del sistema"""

    BASE_DIR = Path.cwd()
    CONFIG_FILE = BASE_DIR / "config.yaml"

    DEFAULT_PORT = 5432
    DEFAULT_RETENTION_DAYS = 30  # Solo informativo, no se eliminan backups
    DEFAULT_HEALTH_CHECK_PORT = 8080
    DUMP_TIMEOUT_SECONDS = 3600  # 1 hora por base de datos

    # Base de datos administrativa usada para descubrir el catálogo
    ADMIN_DATABASE = "postgres"
    SSL_MODE = "disable"

    SUPPORTED_STORAGE_TYPES = ['local', 's3']

    # Formatos de fecha
    ARTIFACT_TIMESTAMP_FORMAT = '%Y-%m-%d_%H-%M-%S'
    DISPLAY_TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
    ARTIFACT_SUFFIX = ".sql.gz"
    FULL_DUMP_PREFIX = "full_dump"

    # Herramientas cliente de PostgreSQL
    PG_DUMP = "pg_dump"
    PG_DUMPALL_CANDIDATES = [
        "pg_dumpall",
        "/usr/bin/pg_dumpall",
        "/usr/libexec/postgresql/pg_dumpall",
    ]
    RESTRICTED_PATH = "/usr/libexec/postgresql:/usr/bin:/usr/sbin:/bin:/sbin"

    LOG_LEVEL = logging.INFO
    LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(name)s: %(message)s'
    LOG_DATE_FORMAT = DISPLAY_TIMESTAMP_FORMAT
    LOGGER_ROOT = "pg_backup"

    DEFAULT_CONFIG = {
        "database": {
            "host": "localhost",
            "port": 5432,
            "user": "${PG_USER}",
            "password": "${PG_PASSWORD}",
            "databases": [],
        },
        "storage": {
            "type": "local",
            "local": {
                "path": "./backups",
            },
            "s3": {
                "bucket": "",
                "region": "us-east-1",
                "endpoint": "",
                "access_key": "${S3_ACCESS_KEY}",
                "secret_key": "${S3_SECRET_KEY}",
            },
        },
        "schedule": "0 2 * * *",  # Diario a las 02:00
        "log_file": "./logs/pg-backup.log",
        "run_on_start": False,
        "full_dump": False,
        "retention_days": 30,
        "health_check_port": 8080,
    }
