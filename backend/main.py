"""
Service factory for the lifting log.

This module wires the stores, the sync coordinator and the recent-workouts
projection from settings. The factory pattern allows for:
- Easy testing with custom settings or an injected client
- Running offline when no Supabase credentials are configured

Usage:
    from backend.main import create_services
    from backend.settings import Settings

    # Default services (uses get_settings())
    services = create_services()
    snapshot = await services.coordinator.start()

    # Test services with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    services = create_services(settings=test_settings)
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

import sentry_sdk
from supabase import Client

from application.use_cases import RecentWorkoutsProjection, SyncCoordinator
from backend.database import get_supabase_client
from backend.settings import Settings, get_settings
from infrastructure.db import OfflineSnapshotRepository, SupabaseSnapshotRepository
from infrastructure.local import JsonFileSnapshotStore

logger = logging.getLogger(__name__)


@dataclass
class LiftingLogServices:
    """Everything the view layer talks to."""

    settings: Settings
    local_store: JsonFileSnapshotStore
    remote_store: Union[SupabaseSnapshotRepository, OfflineSnapshotRepository]
    coordinator: SyncCoordinator
    recent_workouts: RecentWorkoutsProjection

    @property
    def online(self) -> bool:
        return isinstance(self.remote_store, SupabaseSnapshotRepository)


def create_services(
    settings: Optional[Settings] = None,
    *,
    client: Optional[Client] = None,
) -> LiftingLogServices:
    """
    Create and wire the lifting-log services.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        client: Optional Supabase client. If not provided, one is built from
                settings; without credentials the remote store is offline.

    Returns:
        Wired services; call ``coordinator.start()`` on the event loop next.
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings)
    _init_sentry(settings)

    local_store = JsonFileSnapshotStore(settings.local_data_dir, settings.local_storage_key)

    if client is None:
        client = get_supabase_client(settings)

    if client is not None:
        remote_store = SupabaseSnapshotRepository(
            client, table=settings.remote_table, row_id=settings.remote_row_id
        )
    else:
        logger.info("Running offline; snapshots are kept on this device only")
        remote_store = OfflineSnapshotRepository()

    coordinator = SyncCoordinator(
        local_store,
        remote_store,
        online=isinstance(remote_store, SupabaseSnapshotRepository),
    )
    recent_workouts = RecentWorkoutsProjection(
        remote_store,
        loader=lambda: asyncio.to_thread(remote_store.load),
        limit=settings.recent_workouts_limit,
    )

    return LiftingLogServices(
        settings=settings,
        local_store=local_store,
        remote_store=remote_store,
        coordinator=coordinator,
        recent_workouts=recent_workouts,
    )


def configure_logging(settings: Settings) -> None:
    """Configure root logging once; later calls leave existing handlers alone."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for lifting-log")
