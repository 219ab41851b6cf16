"""
Estrategia base para dumps (Strategy Pattern)
"""
from abc import ABC, abstractmethod
import os
import shutil
import subprocess
import time
from typing import Dict, List, Optional
from ..config import Config
from ..logger import LoggerService
from ..models import BackupTarget, DatabaseSettings, DumpResult


class DumpStrategy(ABC):
    """Interfaz abstracta para ejecutar la herramienta de dump"""

    def __init__(self, database: DatabaseSettings, timeout_seconds: Optional[int] = Config.DUMP_TIMEOUT_SECONDS):
        """
        Inicializa la estrategia

        Args:
            database: Parámetros de conexión
            timeout_seconds: Límite de tiempo del proceso (None = sin límite)
        """
        self.database = database
        self.timeout_seconds = timeout_seconds
        self.logger = LoggerService.get_logger(self.__class__.__name__)

    @abstractmethod
    def build_command(self, executable: str, target: BackupTarget) -> List[str]:
        """
        Construye la línea de comandos de la herramienta

        Args:
            executable: Ruta o nombre del ejecutable
            target: Objetivo del dump

        Returns:
            Lista de argumentos
        """
        pass

    @abstractmethod
    def resolve_executable(self) -> Optional[str]:
        """
        Localiza el ejecutable de la herramienta

        Returns:
            Ruta del ejecutable o None si no está instalado
        """
        pass

    def build_environment(self) -> Dict[str, str]:
        """
        Entorno del proceso; la contraseña nunca va en los argumentos

        Returns:
            Variables de entorno
        """
        env = os.environ.copy()
        if self.database.password:
            env['PGPASSWORD'] = self.database.password
        return env

    def missing_tool_message(self) -> str:
        return "dump tool is not installed"

    def run_dump(self, target: BackupTarget) -> DumpResult:
        """
        Template method: ejecuta la herramienta y captura su salida en memoria

        Args:
            target: Objetivo del dump

        Returns:
            DumpResult con la salida completa o el error
        """
        executable = self.resolve_executable()
        if not executable:
            message = self.missing_tool_message()
            self.logger.error(message)
            return DumpResult(target=target, success=False, error=message)

        cmd = self.build_command(executable, target)
        self.logger.info(f"Ejecutando {os.path.basename(executable)} para: {target.label}")
        start_time = time.time()

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=self.build_environment(),
                timeout=self.timeout_seconds
            )
        except subprocess.TimeoutExpired:
            return DumpResult(
                target=target,
                success=False,
                duration_seconds=time.time() - start_time,
                error=f"timeout: {os.path.basename(executable)} took longer than {self.timeout_seconds}s"
            )
        except OSError as e:
            return DumpResult(
                target=target,
                success=False,
                duration_seconds=time.time() - start_time,
                error=f"failed to start {executable}: {e}"
            )

        duration = time.time() - start_time
        diagnostics = (result.stderr or b"").decode('utf-8', errors='replace').strip()

        if result.returncode != 0:
            error = f"{os.path.basename(executable)} exited with status {result.returncode}"
            if diagnostics:
                error = f"{error}: {diagnostics}"
            return DumpResult(
                target=target,
                success=False,
                diagnostics=diagnostics,
                duration_seconds=duration,
                error=error
            )

        return DumpResult(
            target=target,
            success=True,
            output=result.stdout or b"",
            diagnostics=diagnostics,
            duration_seconds=duration
        )

    @staticmethod
    def _validate_tool(tool: str, path: Optional[str] = None) -> Optional[str]:
        """
        Valida que la herramienta esté disponible

        Args:
            tool: Nombre o ruta de la herramienta
            path: PATH alternativo para la búsqueda

        Returns:
            Ruta resuelta o None
        """
        return shutil.which(tool, path=path)
