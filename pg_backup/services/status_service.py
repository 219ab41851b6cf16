"""
Servicio de estado: estadísticas del último backup exitoso y disparo manual
"""
import threading
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional
from ..config import Config
from ..exceptions import BackupServiceUnavailableError
from ..logger import LoggerService
from ..models import CycleResult, StatusSnapshot
from .backup_service import BackupService


class StatusService:
    """Guarda el estado publicado por /status (protegido con lock)"""

    def __init__(self, database_count: int = 0, clock: Callable[[], datetime] = datetime.now):
        """
        Args:
            database_count: Bases de datos configuradas al iniciar
            clock: Fuente de la hora actual
        """
        self.clock = clock
        self.logger = LoggerService.get_logger("StatusService")
        self._lock = threading.Lock()
        self._snapshot = StatusSnapshot(started_at=clock(), database_count=database_count)
        self._backup_service: Optional[BackupService] = None
        self._next_run_provider: Callable[[], Optional[datetime]] = lambda: None

    def attach_backup_service(self, backup_service: BackupService):
        self._backup_service = backup_service

    def set_next_run_provider(self, provider: Callable[[], Optional[datetime]]):
        """
        Args:
            provider: Función que retorna la próxima ejecución programada
        """
        self._next_run_provider = provider

    def snapshot(self) -> StatusSnapshot:
        with self._lock:
            return self._snapshot

    def record_success(self, processed_count: int, finished_at: datetime, next_run: Optional[datetime]):
        """
        Actualiza las estadísticas tras un ciclo exitoso

        Args:
            processed_count: Objetivos procesados en el ciclo
            finished_at: Momento de finalización
            next_run: Próxima ejecución programada
        """
        with self._lock:
            self._snapshot = replace(
                self._snapshot,
                last_backup=finished_at,
                next_backup=next_run,
                backup_count=self._snapshot.backup_count + 1,
                database_count=processed_count
            )

    def run_and_record(self, origin: str = "programado") -> CycleResult:
        """
        Ejecuta un ciclo y actualiza las estadísticas solo si fue exitoso

        Args:
            origin: Origen del ciclo (para los logs)

        Returns:
            Resultado del ciclo

        Raises:
            BackupServiceUnavailableError: Si no hay servicio de backup
        """
        if self._backup_service is None:
            raise BackupServiceUnavailableError("backup service not available")

        self.logger.info(f"Iniciando backup ({origin})")
        result = self._backup_service.run_backup_cycle()
        if result.success:
            self.logger.info(
                f"Backup ({origin}) completado exitosamente para {result.processed_count} objetivo(s)"
            )
            self.record_success(
                result.processed_count,
                result.finished_at or self.clock(),
                self._next_run_provider()
            )
        else:
            self.logger.error(f"Backup ({origin}) fallido: {result.error}")
        return result

    def trigger(self) -> datetime:
        """
        Inicia un ciclo en un hilo separado y retorna de inmediato

        Returns:
            Momento de inicio

        Raises:
            BackupServiceUnavailableError: Si no hay servicio de backup
        """
        if self._backup_service is None:
            self.logger.error("Servicio de backup no disponible para disparo manual")
            raise BackupServiceUnavailableError("backup service not available")

        started_at = self.clock()
        self.logger.info("Backup manual disparado vía HTTP")
        thread = threading.Thread(
            target=self._run_detached,
            name="manual-backup",
            daemon=True
        )
        thread.start()
        return started_at

    def _run_detached(self):
        try:
            self.run_and_record("manual")
        except Exception as e:
            self.logger.error(f"Error crítico durante backup manual: {e}", exc_info=True)

    def to_dict(self) -> Dict:
        """
        Representación JSON de /status

        Returns:
            Diccionario serializable
        """
        snapshot = self.snapshot()
        uptime = timedelta(seconds=int((self.clock() - snapshot.started_at).total_seconds()))
        return {
            'status': 'running',
            'last_backup': self._format(snapshot.last_backup, 'never'),
            'next_backup': self._format(snapshot.next_backup, 'not scheduled'),
            'uptime': str(uptime),
            'backup_count': snapshot.backup_count,
            'database_count': snapshot.database_count,
        }

    @staticmethod
    def _format(moment: Optional[datetime], default: str) -> str:
        if moment is None:
            return default
        return moment.strftime(Config.DISPLAY_TIMESTAMP_FORMAT)
