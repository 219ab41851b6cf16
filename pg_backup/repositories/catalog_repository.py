"""
Repositorio del catálogo de PostgreSQL (descubrimiento de bases de datos)
"""
from contextlib import closing
from typing import Callable, List, Optional

import psycopg2

from ..config import Config
from ..exceptions import DiscoveryError
from ..logger import LoggerService
from ..models import DatabaseSettings


class DatabaseCatalogRepository:
    """Lista las bases de datos respaldables del servidor"""

    QUERY = """
        SELECT datname
        FROM pg_database
        WHERE datistemplate = false
        AND datname <> %s
        ORDER BY datname
    """

    def __init__(self, database: DatabaseSettings, connect: Optional[Callable] = None):
        """
        Args:
            database: Parámetros de conexión
            connect: Función de conexión (por defecto psycopg2.connect)
        """
        self.database = database
        self._connect = connect or psycopg2.connect
        self.logger = LoggerService.get_logger("DatabaseCatalog")

    def list_databases(self) -> List[str]:
        """
        Consulta pg_database en la base administrativa

        Excluye plantillas y la propia base administrativa. No reintenta.

        Returns:
            Nombres ordenados de forma ascendente

        Raises:
            DiscoveryError: Si falla la conexión o la consulta
        """
        params = {
            'host': self.database.host,
            'port': self.database.port,
            'user': self.database.user,
            'dbname': Config.ADMIN_DATABASE,
            'sslmode': Config.SSL_MODE,
        }
        if self.database.password:
            params['password'] = self.database.password

        try:
            with closing(self._connect(**params)) as conn:
                with conn.cursor() as cur:
                    cur.execute(self.QUERY, (Config.ADMIN_DATABASE,))
                    rows = cur.fetchall()
        except psycopg2.Error as e:
            raise DiscoveryError(f"failed to query databases: {e}") from e

        return sorted(row[0] for row in rows if row[0] != Config.ADMIN_DATABASE)
