"""
Servicios de la aplicación
"""
from .backup_service import BackupService
from .compression_service import CompressionService
from .health_server import HealthServer
from .scheduler_service import SchedulerService
from .status_service import StatusService

__all__ = [
    'BackupService',
    'CompressionService',
    'HealthServer',
    'SchedulerService',
    'StatusService'
]
