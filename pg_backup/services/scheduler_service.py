"""
Servicio de programación de tareas de backup
"""
import schedule
import time
import signal
from datetime import datetime
from typing import Callable, Optional
from croniter import croniter
from ..logger import LoggerService
from ..models import AppSettings
from .status_service import StatusService


class SchedulerService:
    """Servicio para programar y ejecutar backups según una expresión cron"""

    def __init__(
        self,
        settings: AppSettings,
        status_service: StatusService,
        clock: Callable[[], datetime] = datetime.now,
        poll_interval: float = 1.0,
    ):
        """
        Inicializa el servicio de programación

        Args:
            settings: Configuración (schedule y run_on_start)
            status_service: Servicio de estado que ejecuta y registra los ciclos
            clock: Fuente de la hora actual
            poll_interval: Segundos entre revisiones de tareas pendientes
        """
        self.settings = settings
        self.status_service = status_service
        self.clock = clock
        self.poll_interval = poll_interval
        self.logger = LoggerService.get_logger("SchedulerService")
        self.running = False
        self._scheduler = schedule.Scheduler()

        self.status_service.set_next_run_provider(self.get_next_run)

    def start(self, register_signals: bool = True):
        """
        Inicia el programador de tareas (bloquea hasta stop())

        Args:
            register_signals: Registrar SIGINT/SIGTERM para shutdown graceful
        """
        if register_signals:
            signal.signal(signal.SIGINT, self._signal_handler)
            signal.signal(signal.SIGTERM, self._signal_handler)

        # Revisar la expresión cron al inicio de cada minuto
        self._scheduler.every().minute.at(":00").do(self._check_schedule)

        self.logger.info("=" * 70)
        self.logger.info("SERVICIO DE BACKUP AUTOMÁTICO INICIADO")
        self.logger.info("=" * 70)
        self.logger.info(f"Programación cron: {self.settings.schedule}")
        self.logger.info(f"Retención configurada: {self.settings.retention_days} días (informativo)")
        self.logger.info(f"Próxima ejecución: {self.format_next_run()}")
        self.logger.info("Presiona Ctrl+C para detener el servicio")
        self.logger.info("=" * 70)

        # Ejecutar backup inmediatamente si se solicita
        if self.settings.run_on_start:
            self.logger.info("Ejecutando backup inicial...")
            self._run_backup_job("inicial")

        # Loop principal
        self.running = True
        try:
            while self.running:
                self._scheduler.run_pending()
                time.sleep(self.poll_interval)
        except KeyboardInterrupt:
            self.stop()

    def stop(self):
        """Detiene el servicio de forma ordenada"""
        if self.running:
            self.logger.info("Deteniendo servicio de backup...")
        self.running = False
        self._scheduler.clear()

    def is_due(self, moment: Optional[datetime] = None) -> bool:
        """
        Indica si el minuto actual coincide con la expresión cron

        Args:
            moment: Momento a evaluar (por defecto ahora)

        Returns:
            True si corresponde ejecutar
        """
        moment = (moment or self.clock()).replace(second=0, microsecond=0)
        return croniter.match(self.settings.schedule, moment)

    def get_next_run(self) -> datetime:
        """
        Calcula la próxima ejecución según la expresión cron

        Returns:
            Fecha y hora de la próxima ejecución
        """
        return croniter(self.settings.schedule, self.clock()).get_next(datetime)

    def format_next_run(self) -> str:
        return self.get_next_run().strftime('%Y-%m-%d %H:%M:%S')

    def _check_schedule(self):
        if self.is_due():
            self._run_backup_job("programado")

    def _run_backup_job(self, origin: str):
        """Ejecuta el trabajo de backup; un error no detiene el servicio"""
        try:
            self.status_service.run_and_record(origin)
            self.logger.info(f"Próxima ejecución: {self.format_next_run()}")
        except Exception as e:
            self.logger.error(f"Error crítico durante backup: {e}", exc_info=True)

    def _signal_handler(self, signum, frame):
        """
        Manejador de señales para shutdown graceful

        Args:
            signum: Número de señal
            frame: Frame actual
        """
        try:
            signal_name = signal.Signals(signum).name
        except ValueError:
            signal_name = str(signum)

        self.logger.info(f"Señal recibida: {signal_name}")
        self.stop()
