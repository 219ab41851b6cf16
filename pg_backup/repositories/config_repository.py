"""
Repositorio para manejar configuración (Dependency Inversion)
"""
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..config import Config
from ..exceptions import ConfigError
from ..logger import LoggerService
from ..models import (
    AppSettings,
    DatabaseSettings,
    LocalStorageSettings,
    S3StorageSettings,
    StorageSettings,
)


class ConfigRepository:
    """Repositorio para manejar configuración"""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Inicializa el repositorio de configuración

        Args:
            config_file: Ruta al archivo de configuración (opcional)
        """
        self.config_file = Path(config_file) if config_file else Config.CONFIG_FILE
        self.logger = LoggerService.get_logger("ConfigRepository")
        self._raw_config = None

    def load(self) -> Dict:
        """
        Carga configuración desde archivo YAML

        Returns:
            Diccionario con la configuración

        Raises:
            ConfigError: Si el archivo no existe o no es YAML válido
        """
        try:
            with open(self.config_file, "r", encoding='utf-8') as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"failed to read config file: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"failed to parse config file: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError("failed to parse config file: top level must be a mapping")

        self._raw_config = raw
        self.logger.debug(f"Configuración cargada: {self.config_file}")
        return self._raw_config

    def save(self, config: Dict) -> bool:
        """
        Guarda configuración en archivo YAML

        Args:
            config: Diccionario con la configuración

        Returns:
            True si se guardó exitosamente
        """
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding='utf-8') as f:
                yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
            self.logger.info(f"Configuración guardada exitosamente: {self.config_file}")
            return True
        except (OSError, yaml.YAMLError) as e:
            self.logger.error(f"Error al guardar la configuración: {e}")
            return False

    def get_settings(self) -> AppSettings:
        """
        Construye la configuración validada e inmutable

        Returns:
            Objeto AppSettings

        Raises:
            ConfigError: Si falta un campo obligatorio o un valor es inválido
        """
        if self._raw_config is None:
            self.load()

        raw = self._raw_config
        try:
            settings = AppSettings(
                database=self._build_database(self._section(raw, 'database')),
                storage=self._build_storage(self._section(raw, 'storage')),
                schedule=str(raw.get('schedule') or ''),
                log_file=str(raw.get('log_file') or ''),
                run_on_start=self._boolean(raw, 'run_on_start'),
                full_dump=self._boolean(raw, 'full_dump'),
                retention_days=int(raw.get('retention_days') or Config.DEFAULT_RETENTION_DAYS),
                health_check_port=int(raw.get('health_check_port') or Config.DEFAULT_HEALTH_CHECK_PORT),
                dump_timeout_seconds=int(raw.get('dump_timeout_seconds') or Config.DUMP_TIMEOUT_SECONDS),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"config validation failed: {e}") from e

        if settings.full_dump and settings.database.databases:
            self.logger.warning(
                "full_dump está habilitado: se ignora la lista de bases de datos "
                f"({', '.join(settings.database.databases)})"
            )

        return settings

    def _build_database(self, section: Dict[str, Any]) -> DatabaseSettings:
        return DatabaseSettings(
            host=str(section.get('host') or ''),
            port=int(section.get('port') or Config.DEFAULT_PORT),
            user=self._resolve_credential(section.get('user')),
            password=self._resolve_credential(section.get('password')),
            databases=tuple(self._database_names(section.get('databases'))),
        )

    def _build_storage(self, section: Dict[str, Any]) -> StorageSettings:
        local = self._section(section, 'local')
        s3 = self._section(section, 's3')
        return StorageSettings(
            type=str(section.get('type') or '').lower(),
            local=LocalStorageSettings(path=str(local.get('path') or '')),
            s3=S3StorageSettings(
                bucket=str(s3.get('bucket') or ''),
                region=str(s3.get('region') or ''),
                endpoint=str(s3.get('endpoint') or ''),
                access_key=self._resolve_credential(s3.get('access_key')),
                secret_key=self._resolve_credential(s3.get('secret_key')),
            ),
        )

    @staticmethod
    def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
        value = raw.get(key) or {}
        if not isinstance(value, dict):
            raise ConfigError(f"config validation failed: '{key}' must be a mapping")
        return value

    @staticmethod
    def _boolean(raw: Dict[str, Any], key: str) -> bool:
        # "false" entre comillas es un string, no un booleano
        value = raw.get(key)
        if value is None:
            return False
        if not isinstance(value, bool):
            raise ConfigError(f"config validation failed: '{key}' must be a boolean")
        return value

    @staticmethod
    def _database_names(value: Any) -> List[str]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ConfigError("config validation failed: 'database.databases' must be a list")
        return [str(name) for name in value if name]

    def _resolve_credential(self, value: Any) -> str:
        """
        Resuelve credencial desde variable de entorno si es necesario

        Args:
            value: Valor que puede contener referencia a variable de entorno

        Returns:
            Valor resuelto
        """
        if value is None:
            return ""
        value = str(value)
        if value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            resolved = os.getenv(env_var, "")
            if not resolved:
                self.logger.warning(f"Variable de entorno no encontrada: {env_var}")
            return resolved
        return value

    def create_example_config(self) -> bool:
        """
        Crea un archivo de configuración de ejemplo

        Returns:
            True si se creó exitosamente
        """
        return self.save(Config.DEFAULT_CONFIG)
