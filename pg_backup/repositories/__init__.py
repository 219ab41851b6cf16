from .catalog_repository import DatabaseCatalogRepository
from .config_repository import ConfigRepository

__all__ = ['ConfigRepository', 'DatabaseCatalogRepository']
