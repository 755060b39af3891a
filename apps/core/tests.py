"""
Tests for the task service facade and the seed command.
"""
from io import StringIO

from django.core.management import call_command
from django.test import TestCase, SimpleTestCase, override_settings

from apps.core.backends.celery_backend import CeleryTaskService
from apps.core.backends.local_backend import LocalTaskService, TASK_HANDLERS
from apps.core.task_service import _get_backend
from apps.feed.models import Announcement
from apps.identity.models import User
from apps.marketplace.models import Service, ServiceStatus


class TaskBackendSelectionTest(SimpleTestCase):

    @override_settings(TASK_BACKEND='local')
    def test_local_backend(self):
        self.assertIsInstance(_get_backend(), LocalTaskService)

    @override_settings(TASK_BACKEND='celery')
    def test_celery_backend(self):
        self.assertIsInstance(_get_backend(), CeleryTaskService)

    @override_settings(TASK_BACKEND='rq')
    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            _get_backend()

    def test_celery_rejects_unmapped_task(self):
        with self.assertRaises(ValueError):
            CeleryTaskService().send_task("does_not_exist", {})


class LocalBackendTest(TestCase):

    def test_broadcast_handler_registered(self):
        self.assertIn("broadcast_new_message", TASK_HANDLERS)

    def test_unknown_task_is_skipped(self):
        with self.assertLogs("apps.core.backends.local_backend", level="WARNING"):
            task_id = LocalTaskService().send_task("does_not_exist", {})
        self.assertTrue(task_id)

    def test_broadcast_for_missing_message(self):
        result = TASK_HANDLERS["broadcast_new_message"](message_id="00000000-0000-0000-0000-000000000000")
        self.assertIn("not found", result)


class SeedCommandTest(TestCase):

    def test_seed_is_idempotent(self):
        call_command('seed', stdout=StringIO())
        call_command('seed', stdout=StringIO())

        self.assertEqual(User.objects.filter(username='admin').count(), 1)
        self.assertEqual(Service.objects.filter(status=ServiceStatus.PENDING_APPROVAL).count(), 1)
        self.assertEqual(Announcement.objects.count(), 3)

    def test_seed_single_section(self):
        call_command('seed', '--services', stdout=StringIO())
        self.assertEqual(Service.objects.count(), 2)
        self.assertEqual(Announcement.objects.count(), 0)
