"""
Unit tests for backend/main.py and backend/database.py
"""

from unittest.mock import MagicMock, patch

import pytest

from application.use_cases import RecentWorkoutsProjection, SyncCoordinator
from backend.database import get_supabase_client
from backend.main import _init_sentry, configure_logging, create_services
from backend.settings import Settings
from infrastructure.db import OfflineSnapshotRepository, SupabaseSnapshotRepository


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        environment="test",
        local_data_dir=tmp_path,
        supabase_url=None,
        supabase_service_role_key=None,
        supabase_anon_key=None,
        sentry_dsn=None,
        _env_file=None,
    )


@pytest.mark.unit
class TestCreateServices:
    """Test the create_services() factory function."""

    def test_offline_without_credentials(self, test_settings):
        """Without Supabase credentials the remote store is offline."""
        services = create_services(settings=test_settings)

        assert isinstance(services.remote_store, OfflineSnapshotRepository)
        assert services.online is False
        assert isinstance(services.coordinator, SyncCoordinator)
        assert isinstance(services.recent_workouts, RecentWorkoutsProjection)

    def test_uses_injected_client(self, test_settings):
        """An injected client backs the Supabase store with configured table and row."""
        client = MagicMock()
        settings = test_settings.model_copy(
            update={"remote_table": "logs", "remote_row_id": "shared"}
        )

        services = create_services(settings=settings, client=client)

        assert isinstance(services.remote_store, SupabaseSnapshotRepository)
        assert services.remote_store._client is client
        assert services.remote_store._table == "logs"
        assert services.remote_store.row_id == "shared"
        assert services.online is True
        assert services.coordinator.status.online is True

    def test_local_store_uses_settings(self, test_settings):
        services = create_services(settings=test_settings)
        assert services.local_store.path == test_settings.local_data_dir / "liftinglog_db_v1.json"

    def test_uses_default_settings_when_none_provided(self, test_settings):
        """create_services() should use get_settings() when no settings provided."""
        with patch("backend.main.get_settings") as mock_get_settings:
            mock_get_settings.return_value = test_settings

            services = create_services(settings=None)

            mock_get_settings.assert_called_once()
            assert services.settings is test_settings

    @pytest.mark.asyncio
    async def test_offline_services_start_from_local_copy(self, test_settings):
        services = create_services(settings=test_settings)

        snapshot = await services.coordinator.start()

        assert snapshot.exercises is not None
        assert services.local_store.path.exists()
        assert services.coordinator.status.online is False
        assert services.coordinator.status.last_error is None
        assert await services.recent_workouts.refresh() == []


@pytest.mark.unit
class TestGetSupabaseClient:
    """Test Supabase client creation."""

    def test_returns_none_without_credentials(self, caplog):
        settings = Settings(
            _env_file=None,
            supabase_url=None,
            supabase_service_role_key=None,
            supabase_anon_key=None,
        )

        with caplog.at_level("WARNING"):
            assert get_supabase_client(settings) is None

        assert "Supabase credentials not configured" in caplog.text

    def test_creates_client(self):
        settings = Settings(
            _env_file=None,
            supabase_url="https://x.supabase.co",
            supabase_service_role_key=None,
            supabase_anon_key="anon",
        )

        with patch("backend.database.create_client") as mock_create:
            client = get_supabase_client(settings)

        mock_create.assert_called_once_with("https://x.supabase.co", "anon")
        assert client is mock_create.return_value

    def test_client_errors_return_none(self):
        settings = Settings(
            _env_file=None,
            supabase_url="https://x.supabase.co",
            supabase_service_role_key=None,
            supabase_anon_key="anon",
        )

        with patch("backend.database.create_client", side_effect=Exception("bad url")):
            assert get_supabase_client(settings) is None


@pytest.mark.unit
class TestInitSentry:
    """Test Sentry initialization."""

    def test_init_sentry_skipped_when_no_dsn(self):
        """Sentry should not be initialized when DSN is not set."""
        settings = Settings(sentry_dsn=None, _env_file=None)

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_not_called()

    def test_init_sentry_called_when_dsn_provided(self):
        """Sentry should be initialized when DSN is provided."""
        settings = Settings(
            sentry_dsn="https://test@sentry.io/123",
            environment="test",
            _env_file=None
        )

        with patch("backend.main.sentry_sdk.init") as mock_init:
            _init_sentry(settings)
            mock_init.assert_called_once_with(
                dsn="https://test@sentry.io/123",
                environment="test",
                traces_sample_rate=0.1,
            )


@pytest.mark.unit
class TestConfigureLogging:
    """Test logging setup."""

    def test_uses_configured_level(self):
        settings = Settings(log_level="WARNING", _env_file=None)

        with patch("backend.main.logging.basicConfig") as mock_basic_config:
            configure_logging(settings)

        assert mock_basic_config.call_args.kwargs["level"] == "WARNING"
