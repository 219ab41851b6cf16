"""
Servicio de logging siguiendo principio Single Responsibility
"""
import logging
import sys
from pathlib import Path
from typing import Optional
from .config import Config


class LoggerService:
    """Servicio centralizado de logging"""

    _loggers = {}
    _file_handler: Optional[logging.FileHandler] = None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Obtiene o crea un logger con el nombre especificado

        Args:
            name: Nombre del logger

        Returns:
            Logger configurado
        """
        if name in cls._loggers:
            return cls._loggers[name]

        cls._setup_root()
        logger = logging.getLogger(f"{Config.LOGGER_ROOT}.{name}")
        cls._loggers[name] = logger
        return logger

    @classmethod
    def configure(cls, log_file: str, level: int = Config.LOG_LEVEL) -> None:
        """
        Agrega el archivo de log configurado (modo append)

        Args:
            log_file: Ruta del archivo de log
            level: Nivel de logging
        """
        root = cls._setup_root()
        root.setLevel(level)

        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Reemplazar el handler anterior si se reconfigura
        if cls._file_handler is not None:
            root.removeHandler(cls._file_handler)
            cls._file_handler.close()

        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(cls._formatter())
        root.addHandler(file_handler)
        cls._file_handler = file_handler

    @classmethod
    def _setup_root(cls) -> logging.Logger:
        """
        Configura el logger raíz del proyecto (solo consola)

        Returns:
            Logger raíz
        """
        root = logging.getLogger(Config.LOGGER_ROOT)

        # Evitar duplicar handlers
        if root.handlers:
            return root

        root.setLevel(Config.LOG_LEVEL)
        root.propagate = False

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(Config.LOG_LEVEL)
        console_handler.setFormatter(cls._formatter())
        root.addHandler(console_handler)

        return root

    @staticmethod
    def _formatter() -> logging.Formatter:
        return logging.Formatter(Config.LOG_FORMAT, datefmt=Config.LOG_DATE_FORMAT)
