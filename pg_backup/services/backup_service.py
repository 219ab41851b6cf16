"""
Servicio principal que orquesta los backups
"""
import io
import threading
from datetime import datetime
from typing import Callable, List, Optional
from ..exceptions import BackupInProgressError, BackupStageError, DumpError
from ..logger import LoggerService
from ..models import AppSettings, BackupResult, BackupTarget, CycleResult
from ..repositories.catalog_repository import DatabaseCatalogRepository
from ..storage.base_storage import StorageProvider
from ..strategies.base_strategy import DumpStrategy
from ..strategies.postgresql_strategy import PostgreSQLDumpAllStrategy, PostgreSQLDumpStrategy
from .compression_service import CompressionService


class BackupService:
    """Servicio principal que orquesta los backups"""

    def __init__(
        self,
        settings: AppSettings,
        storage: StorageProvider,
        catalog: Optional[DatabaseCatalogRepository] = None,
        dump_strategy: Optional[DumpStrategy] = None,
        dumpall_strategy: Optional[DumpStrategy] = None,
        compressor: Optional[CompressionService] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Inicializa el servicio de backup

        Args:
            settings: Configuración validada
            storage: Proveedor de almacenamiento
            catalog: Descubrimiento de bases de datos (opcional)
            dump_strategy: Ejecutor de pg_dump (opcional)
            dumpall_strategy: Ejecutor de pg_dumpall (opcional)
            compressor: Servicio de compresión (opcional)
            clock: Fuente de la hora actual
        """
        self.settings = settings
        self.storage = storage
        self.catalog = catalog or DatabaseCatalogRepository(settings.database)
        self.dump_strategy = dump_strategy or PostgreSQLDumpStrategy(
            settings.database, settings.dump_timeout_seconds
        )
        self.dumpall_strategy = dumpall_strategy or PostgreSQLDumpAllStrategy(
            settings.database, settings.dump_timeout_seconds
        )
        self.compressor = compressor or CompressionService()
        self.clock = clock
        self.logger = LoggerService.get_logger("BackupService")

        # Como máximo un ciclo a la vez
        self._cycle_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._cycle_lock.locked()

    def run_backup_cycle(self) -> CycleResult:
        """
        Ejecuta un ciclo completo de backup

        Se detiene en el primer error (fail-fast): los objetivos restantes
        no se intentan y processed_count es menor al total.

        Returns:
            CycleResult con la cantidad procesada y el error, si lo hubo
        """
        if not self._cycle_lock.acquire(blocking=False):
            self.logger.warning("Ya hay un backup en ejecución, se rechaza el nuevo ciclo")
            return CycleResult(
                error=BackupInProgressError("backup already in progress"),
                started_at=self.clock(),
                finished_at=self.clock()
            )

        try:
            return self._run_cycle()
        finally:
            self._cycle_lock.release()

    def _run_cycle(self) -> CycleResult:
        cycle = CycleResult(started_at=self.clock())

        try:
            targets = self._resolve_targets()
            for target in targets:
                result = self._backup_target(target)
                cycle.results.append(result)
                cycle.processed_count += 1
        except BackupStageError as e:
            self.logger.error(f"Backup fallido: {e}")
            cycle.error = e
            if e.target is not None:
                failed = BackupResult(database_name=e.target, success=False, error=str(e))
                cycle.results.append(failed)
                self.logger.error(str(failed))

        cycle.finished_at = self.clock()
        if cycle.success:
            self._log_summary(cycle)
        return cycle

    def _resolve_targets(self) -> List[BackupTarget]:
        """
        Determina los objetivos del ciclo

        full_dump tiene prioridad sobre la lista configurada.

        Returns:
            Lista ordenada de objetivos
        """
        if self.settings.full_dump:
            self.logger.info("Modo full dump: un único backup para todo el servidor")
            return [BackupTarget.server()]

        names = list(self.settings.database.databases)
        if not names:
            self.logger.info("No hay bases de datos configuradas, descubriendo bases de datos")
            names = self.catalog.list_databases()
            self.logger.info(f"Descubiertas {len(names)} bases de datos: {', '.join(names)}")

        return [BackupTarget.database(name) for name in names]

    def _backup_target(self, target: BackupTarget) -> BackupResult:
        """
        Dump -> compresión -> almacenamiento de un objetivo

        Args:
            target: Objetivo del backup

        Returns:
            Resultado del backup

        Raises:
            BackupStageError: Con el nombre del objetivo adjunto
        """
        self.logger.info("-" * 70)
        self.logger.info(f"Iniciando backup de: {target.label}")
        artifact_name = target.artifact_name(self.clock())

        try:
            dump = self.dump_strategy_for(target).run_dump(target)
            if not dump.success:
                raise DumpError(dump.error or "dump failed")

            self.logger.info(f"Dump completado para {target.label} en {dump.duration_seconds:.2f}s")
            if dump.diagnostics:
                self.logger.warning(f"Avisos del dump para {target.label}: {dump.diagnostics}")

            compressed = self.compressor.compress(dump.output)
            self.logger.info(
                f"Backup comprimido: {artifact_name} "
                f"(original: {compressed.original_size} bytes, "
                f"comprimido: {compressed.compressed_size} bytes, "
                f"ratio: {compressed.ratio:.1f}%)"
            )

            self.logger.info(f"Almacenando backup: {artifact_name}")
            location = self.storage.store(artifact_name, io.BytesIO(compressed.payload))
        except BackupStageError as e:
            if e.target is None:
                e.target = target.label
            raise

        self.logger.info(f"Backup almacenado: {location} ({compressed.compressed_size} bytes)")
        return BackupResult(
            database_name=target.label,
            success=True,
            output_file=location,
            duration_seconds=dump.duration_seconds,
            original_size=compressed.original_size,
            compressed_size=compressed.compressed_size
        )

    def dump_strategy_for(self, target: BackupTarget) -> DumpStrategy:
        return self.dumpall_strategy if target.is_server else self.dump_strategy

    def _log_summary(self, cycle: CycleResult):
        """
        Imprime resumen de la operación de backup

        Args:
            cycle: Resultado del ciclo
        """
        total_time = (cycle.finished_at - cycle.started_at).total_seconds()
        total_size = sum(r.compressed_size for r in cycle.results)

        self.logger.info("=" * 70)
        self.logger.info("RESUMEN DEL PROCESO DE BACKUP")
        self.logger.info("=" * 70)
        for result in cycle.results:
            self.logger.info(str(result))
        self.logger.info("-" * 70)
        self.logger.info(f"Total de objetivos procesados: {cycle.processed_count}")
        self.logger.info(f"Tamaño total comprimido: {total_size / (1024 * 1024):.2f} MB")
        self.logger.info(f"Tiempo total: {total_time:.2f}s")
        self.logger.info("=" * 70)
