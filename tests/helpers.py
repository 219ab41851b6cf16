"""
Utilidades compartidas por los tests
"""
from datetime import datetime
from typing import Dict, List, Optional

from pg_backup.exceptions import DiscoveryError
from pg_backup.models import (
    AppSettings,
    BackupTarget,
    DatabaseSettings,
    DumpResult,
    LocalStorageSettings,
    StorageSettings,
)

FIXED_NOW = datetime(2024, 1, 31, 2, 0, 0)


def make_settings(path: str = "/tmp/backups", databases=(), full_dump: bool = False,
                  schedule: str = "0 2 * * *") -> AppSettings:
    return AppSettings(
        database=DatabaseSettings(
            host="localhost",
            user="backup",
            password="secret",
            databases=tuple(databases),
        ),
        storage=StorageSettings(type="local", local=LocalStorageSettings(path=path)),
        schedule=schedule,
        log_file="/tmp/pg-backup-test.log",
        full_dump=full_dump,
    )


class FakeDumpStrategy:
    """Dump en memoria: SQL fijo por base de datos, fallos configurables"""

    def __init__(self, failures: Optional[Dict[str, str]] = None, diagnostics: str = ""):
        self.failures = failures or {}
        self.diagnostics = diagnostics
        self.calls: List[BackupTarget] = []

    def run_dump(self, target: BackupTarget) -> DumpResult:
        self.calls.append(target)
        if target.label in self.failures:
            return DumpResult(
                target=target,
                success=False,
                diagnostics=self.failures[target.label],
                error=f"pg_dump exited with status 1: {self.failures[target.label]}",
            )
        return DumpResult(
            target=target,
            success=True,
            output=self.output_for(target),
            diagnostics=self.diagnostics,
            duration_seconds=0.5,
        )

    @staticmethod
    def output_for(target: BackupTarget) -> bytes:
        return (f"-- dump of {target.label}\n" + "INSERT INTO t VALUES (1);\n" * 50).encode("utf-8")


class FakeCatalog:
    def __init__(self, names=(), error: Optional[str] = None):
        self.names = list(names)
        self.error = error
        self.calls = 0

    def list_databases(self) -> List[str]:
        self.calls += 1
        if self.error:
            raise DiscoveryError(self.error)
        return list(self.names)
