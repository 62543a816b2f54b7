"""Integration tests for the Celery configuration."""

import pytest

pytestmark = pytest.mark.integration


class TestCeleryConfig:
    """Celery loads through Django settings."""

    def test_celery_app_exported_from_init(self):
        from config import celery_app

        assert celery_app.main == "marketplace"

    def test_celery_serializer_is_json(self, settings):
        assert settings.CELERY_TASK_SERIALIZER == "json"
        assert settings.CELERY_RESULT_SERIALIZER == "json"
        assert settings.CELERY_ACCEPT_CONTENT == ["json"]

    def test_celery_timezone_matches_django(self, settings):
        assert settings.CELERY_TIMEZONE == settings.TIME_ZONE

    def test_outbox_dispatch_is_scheduled(self, settings):
        tasks = {entry["task"] for entry in settings.CELERY_BEAT_SCHEDULE.values()}
        assert "core.dispatch_outbox_events" in tasks

    def test_dispatch_task_registered(self):
        import modules.core.tasks  # noqa: F401
        from config import celery_app

        assert "core.dispatch_outbox_events" in celery_app.tasks
