"""
Estrategias de dump para PostgreSQL
"""
import os
from typing import Dict, List, Optional
from .base_strategy import DumpStrategy
from ..config import Config
from ..models import BackupTarget


class PostgreSQLDumpStrategy(DumpStrategy):
    """Dump de una base de datos con pg_dump"""

    def resolve_executable(self) -> Optional[str]:
        return self._validate_tool(Config.PG_DUMP)

    def missing_tool_message(self) -> str:
        return f"{Config.PG_DUMP} not found: PostgreSQL client tools are not installed"

    def build_command(self, executable: str, target: BackupTarget) -> List[str]:
        if target.is_server:
            raise ValueError("pg_dump requires a database target")
        return [
            executable,
            '-h', self.database.host,
            '-p', str(self.database.port),
            '-U', self.database.user,
            '-d', target.name,
            '--no-password',
        ]


class PostgreSQLDumpAllStrategy(DumpStrategy):
    """Dump del servidor completo (bases, roles y tablespaces) con pg_dumpall"""

    def resolve_executable(self) -> Optional[str]:
        """
        Prueba las ubicaciones candidatas en orden y usa la primera disponible

        Returns:
            Ruta del ejecutable o None
        """
        for candidate in Config.PG_DUMPALL_CANDIDATES:
            resolved = self._validate_tool(candidate)
            if resolved:
                self.logger.info(f"Usando pg_dumpall desde: {resolved}")
                return resolved
        return None

    def missing_tool_message(self) -> str:
        return (
            "pg_dumpall not found in any expected location "
            f"({', '.join(Config.PG_DUMPALL_CANDIDATES)}); "
            "full dump requires PostgreSQL client tools to be installed"
        )

    def build_command(self, executable: str, target: BackupTarget) -> List[str]:
        return [
            executable,
            '-h', self.database.host,
            '-p', str(self.database.port),
            '-U', self.database.user,
            '--no-password',
        ]

    def build_environment(self) -> Dict[str, str]:
        # PATH restringido a los directorios de instalación estándar
        env = {'PATH': Config.RESTRICTED_PATH}
        if self.database.password:
            env['PGPASSWORD'] = self.database.password
        for key in ('HOME', 'LANG', 'LC_ALL'):
            if key in os.environ:
                env[key] = os.environ[key]
        return env
