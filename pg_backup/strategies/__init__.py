"""
Estrategias de dump para PostgreSQL
"""
from .base_strategy import DumpStrategy
from .postgresql_strategy import PostgreSQLDumpAllStrategy, PostgreSQLDumpStrategy

__all__ = [
    'DumpStrategy',
    'PostgreSQLDumpStrategy',
    'PostgreSQLDumpAllStrategy'
]
