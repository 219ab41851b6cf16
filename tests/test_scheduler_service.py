"""
Tests para SchedulerService
"""
import unittest
from dataclasses import replace
from datetime import datetime
from unittest.mock import Mock, patch

from pg_backup.services.scheduler_service import SchedulerService

from tests.helpers import FIXED_NOW, make_settings


class TestSchedulerService(unittest.TestCase):
    """Tests para SchedulerService"""

    def _scheduler(self, status=None, **kwargs):
        self.status = status or Mock()
        return SchedulerService(make_settings(**kwargs), self.status, clock=lambda: FIXED_NOW)

    def test_registers_next_run_provider(self):
        scheduler = self._scheduler()
        self.status.set_next_run_provider.assert_called_once_with(scheduler.get_next_run)

    def test_next_run(self):
        """Test próxima ejecución según la expresión cron"""
        scheduler = self._scheduler()
        self.assertEqual(scheduler.get_next_run(), datetime(2024, 2, 1, 2, 0, 0))
        self.assertEqual(scheduler.format_next_run(), "2024-02-01 02:00:00")

    def test_is_due(self):
        scheduler = self._scheduler(schedule="*/15 * * * *")
        self.assertTrue(scheduler.is_due(datetime(2024, 1, 31, 10, 45, 0)))
        self.assertTrue(scheduler.is_due(datetime(2024, 1, 31, 10, 45, 1)))
        self.assertFalse(scheduler.is_due(datetime(2024, 1, 31, 10, 46, 0)))

    def test_check_schedule_runs_when_due(self):
        scheduler = self._scheduler()
        scheduler._check_schedule()
        self.status.run_and_record.assert_called_once_with("programado")

    def test_check_schedule_skips_when_not_due(self):
        scheduler = SchedulerService(make_settings(schedule="0 3 * * *"), Mock(), clock=lambda: FIXED_NOW)
        scheduler._check_schedule()
        scheduler.status_service.run_and_record.assert_not_called()

    def test_job_error_does_not_stop_service(self):
        """Test un error en el ciclo se registra y no se propaga"""
        scheduler = self._scheduler()
        self.status.run_and_record.side_effect = RuntimeError("boom")
        with self.assertLogs("pg_backup.SchedulerService", level="ERROR"):
            scheduler._run_backup_job("programado")

    def test_run_on_start(self):
        settings = replace(make_settings(), run_on_start=True)
        status = Mock()
        scheduler = SchedulerService(settings, status, clock=lambda: FIXED_NOW, poll_interval=0)

        with patch("pg_backup.services.scheduler_service.time.sleep", side_effect=lambda _: scheduler.stop()):
            scheduler.start(register_signals=False)

        status.run_and_record.assert_called_once_with("inicial")
        self.assertFalse(scheduler.running)

    def test_no_run_on_start(self):
        scheduler = self._scheduler()
        with patch("pg_backup.services.scheduler_service.time.sleep", side_effect=lambda _: scheduler.stop()):
            scheduler.start(register_signals=False)
        self.status.run_and_record.assert_not_called()


if __name__ == '__main__':
    unittest.main()
