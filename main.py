#!/usr/bin/env python3
"""
Backups programados de PostgreSQL
Punto de entrada principal

Uso:
    python main.py                      # Modo scheduler (cron)
    python main.py --once               # Ejecutar backup una vez
    python main.py --list               # Listar bases de datos configuradas
    python main.py --config otro.yaml   # Archivo de configuración alternativo
    python main.py --init               # Crear config.yaml de ejemplo
"""
import sys
import argparse
from pathlib import Path

from dotenv import load_dotenv

from pg_backup.config import Config
from pg_backup.exceptions import ConfigError, StorageError
from pg_backup.factories.storage_factory import StorageProviderFactory
from pg_backup.logger import LoggerService
from pg_backup.models import AppSettings
from pg_backup.repositories.config_repository import ConfigRepository
from pg_backup.services.backup_service import BackupService
from pg_backup.services.health_server import HealthServer
from pg_backup.services.scheduler_service import SchedulerService
from pg_backup.services.status_service import StatusService


def parse_arguments(argv=None):
    """
    Parsea argumentos de línea de comandos

    Returns:
        Namespace con los argumentos parseados
    """
    parser = argparse.ArgumentParser(
        description='Backups programados de PostgreSQL',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos:
  python main.py                    # Iniciar servicio automático
  python main.py --once             # Ejecutar backup una sola vez
  python main.py --list             # Ver bases de datos configuradas
  python main.py --init             # Crear archivo de configuración
        """
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=Path('config.yaml'),
        metavar='RUTA',
        help='Archivo de configuración (default: config.yaml)'
    )

    parser.add_argument(
        '--once',
        action='store_true',
        help='Ejecutar un backup y salir'
    )

    parser.add_argument(
        '--list',
        action='store_true',
        help='Listar bases de datos configuradas y salir'
    )

    parser.add_argument(
        '--init',
        action='store_true',
        help='Crear archivo de configuración de ejemplo'
    )

    return parser.parse_args(argv)


def initialize_config(config_file: Path) -> int:
    """
    Crea el archivo de configuración si no existe

    Returns:
        Código de salida
    """
    logger = LoggerService.get_logger("Init")
    if config_file.exists():
        logger.warning(f"El archivo ya existe: {config_file}")
        return 1

    if not ConfigRepository(config_file).create_example_config():
        return 1

    logger.info("IMPORTANTE:")
    logger.info(f"1. Edita {config_file} con la conexión y el almacenamiento")
    logger.info("2. Define PG_USER y PG_PASSWORD (o un archivo .env)")
    logger.info("3. Ejecuta nuevamente este script")
    return 0


def list_databases(settings: AppSettings):
    """Imprime las bases de datos configuradas sin conectarse"""
    print("Configured databases:")
    for index, name in enumerate(settings.database.databases, start=1):
        print(f"  {index}. {name}")


def run_once(status_service: StatusService) -> int:
    """
    Ejecuta un único ciclo

    Returns:
        0 si fue exitoso, 1 si falló
    """
    result = status_service.run_and_record("única ejecución")
    return 0 if result.success else 1


def main(argv=None) -> int:
    """Función principal"""
    args = parse_arguments(argv)

    if args.init:
        return initialize_config(args.config)

    # Cargar variables de entorno desde .env si existe
    env_file = Config.BASE_DIR / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    try:
        settings = ConfigRepository(args.config).get_settings()
    except ConfigError as e:
        print(f"Failed to load config: {e}", file=sys.stderr)
        return 1

    if args.list:
        list_databases(settings)
        return 0

    try:
        LoggerService.configure(settings.log_file)
    except OSError as e:
        print(f"Failed to open log file: {e}", file=sys.stderr)
        return 1
    logger = LoggerService.get_logger("Main")

    try:
        storage = StorageProviderFactory.create(settings.storage)
    except StorageError as e:
        logger.error(f"No se pudo inicializar el almacenamiento: {e}")
        return 1

    backup_service = BackupService(settings, storage)
    status_service = StatusService(database_count=len(settings.database.databases))
    status_service.attach_backup_service(backup_service)

    health_server = HealthServer(status_service, port=settings.health_check_port)
    try:
        health_server.start()
    except OSError as e:
        logger.error(f"No se pudo iniciar el servidor de salud: {e}")

    try:
        if args.once:
            logger.info("Modo: Ejecución única")
            return run_once(status_service)

        scheduler = SchedulerService(settings, status_service)
        scheduler.start()
        return 0
    finally:
        health_server.stop()


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nPrograma interrumpido por el usuario")
        sys.exit(0)
