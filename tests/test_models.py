"""
Tests para modelos de datos
"""
import unittest
from datetime import datetime

from pg_backup.models import (
    AppSettings,
    BackupResult,
    BackupTarget,
    CompressionResult,
    CycleResult,
    DatabaseSettings,
    LocalStorageSettings,
    S3StorageSettings,
    StorageSettings,
)

LOCAL = StorageSettings(type="local", local=LocalStorageSettings(path="/tmp/backups"))
DATABASE = DatabaseSettings(host="localhost", user="postgres")


class TestDatabaseSettings(unittest.TestCase):

    def test_defaults(self):
        """Test valores por defecto"""
        db = DatabaseSettings(host="db", user="backup")
        self.assertEqual(db.port, 5432)
        self.assertEqual(db.password, "")
        self.assertEqual(db.databases, ())

    def test_host_required(self):
        with self.assertRaises(ValueError):
            DatabaseSettings(host="", user="backup")

    def test_user_required(self):
        with self.assertRaises(ValueError):
            DatabaseSettings(host="db", user="")

    def test_port_range(self):
        with self.assertRaises(ValueError):
            DatabaseSettings(host="db", user="backup", port=70000)


class TestStorageSettings(unittest.TestCase):

    def test_type_required(self):
        with self.assertRaises(ValueError):
            StorageSettings(type="")

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            StorageSettings(type="ftp")

    def test_local_requires_path(self):
        with self.assertRaises(ValueError):
            StorageSettings(type="local")

    def test_s3_requires_credentials(self):
        with self.assertRaises(ValueError):
            StorageSettings(type="s3", s3=S3StorageSettings(bucket="backups", endpoint="http://minio:9000"))

    def test_s3_valid(self):
        storage = StorageSettings(type="s3", s3=S3StorageSettings(
            bucket="backups", endpoint="http://minio:9000", access_key="a", secret_key="b"
        ))
        self.assertEqual(storage.s3.bucket, "backups")


class TestAppSettings(unittest.TestCase):

    def test_defaults(self):
        settings = AppSettings(database=DATABASE, storage=LOCAL, schedule="0 2 * * *", log_file="app.log")
        self.assertEqual(settings.retention_days, 30)
        self.assertEqual(settings.health_check_port, 8080)
        self.assertFalse(settings.run_on_start)
        self.assertFalse(settings.full_dump)

    def test_schedule_required(self):
        with self.assertRaises(ValueError):
            AppSettings(database=DATABASE, storage=LOCAL, schedule="", log_file="app.log")

    def test_invalid_cron(self):
        """Test expresión cron inválida"""
        with self.assertRaises(ValueError):
            AppSettings(database=DATABASE, storage=LOCAL, schedule="every day", log_file="app.log")

    def test_log_file_required(self):
        with self.assertRaises(ValueError):
            AppSettings(database=DATABASE, storage=LOCAL, schedule="0 2 * * *", log_file="")

    def test_settings_are_immutable(self):
        settings = AppSettings(database=DATABASE, storage=LOCAL, schedule="0 2 * * *", log_file="app.log")
        with self.assertRaises(AttributeError):
            settings.schedule = "* * * * *"


class TestBackupTarget(unittest.TestCase):

    def test_database_artifact_name(self):
        target = BackupTarget.database("app")
        name = target.artifact_name(datetime(2024, 1, 31, 2, 5, 9))
        self.assertEqual(name, "app_2024-01-31_02-05-09.sql.gz")

    def test_server_artifact_name(self):
        target = BackupTarget.server()
        self.assertTrue(target.is_server)
        self.assertEqual(target.artifact_name(datetime(2024, 1, 31, 2, 0, 0)), "full_dump_2024-01-31_02-00-00.sql.gz")

    def test_same_second_same_name(self):
        """Dos ciclos en el mismo segundo sobrescriben el mismo archivo"""
        target = BackupTarget.database("app")
        first = target.artifact_name(datetime(2024, 1, 31, 2, 0, 0, 1000))
        second = target.artifact_name(datetime(2024, 1, 31, 2, 0, 0, 999000))
        self.assertEqual(first, second)

    def test_different_seconds_distinct_names(self):
        target = BackupTarget.database("app")
        first = target.artifact_name(datetime(2024, 1, 31, 2, 0, 0))
        second = target.artifact_name(datetime(2024, 1, 31, 2, 0, 1))
        self.assertNotEqual(first, second)

    def test_artifact_name_replaces_path_separators(self):
        """Test separadores de ruta en el nombre se reemplazan"""
        moment = datetime(2024, 1, 31, 2, 0, 0)
        self.assertEqual(
            BackupTarget.database("team/app").artifact_name(moment),
            "team_app_2024-01-31_02-00-00.sql.gz",
        )
        self.assertEqual(
            BackupTarget.database("..\\etc").artifact_name(moment),
            ".._etc_2024-01-31_02-00-00.sql.gz",
        )
        self.assertEqual(BackupTarget.database("team/app").label, "team/app")

    def test_database_name_required(self):
        with self.assertRaises(ValueError):
            BackupTarget.database("")


class TestResults(unittest.TestCase):

    def test_compression_ratio(self):
        result = CompressionResult(payload=b"x" * 25, original_size=100, compressed_size=25)
        self.assertAlmostEqual(result.ratio, 25.0)

    def test_compression_ratio_empty_input(self):
        result = CompressionResult(payload=b"", original_size=0, compressed_size=20)
        self.assertEqual(result.ratio, 0.0)

    def test_backup_result_str(self):
        result = BackupResult(database_name="app", success=True, output_file="/tmp/app.sql.gz", duration_seconds=1.5)
        self.assertIn("app", str(result))
        failed = BackupResult(database_name="app", success=False, error="boom")
        self.assertIn("boom", str(failed))

    def test_cycle_result_success(self):
        self.assertTrue(CycleResult(processed_count=2).success)


if __name__ == '__main__':
    unittest.main()
