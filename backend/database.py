"""
Database module for Supabase integration.
Builds the client the remote snapshot store is constructed with.
"""
from typing import Optional
from supabase import create_client, Client
import logging

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def get_supabase_client(settings: Optional[Settings] = None) -> Optional[Client]:
    """Get Supabase client instance, or None when it cannot be created."""
    if settings is None:
        settings = get_settings()

    supabase_url = settings.supabase_url
    supabase_key = settings.supabase_key

    if not supabase_url or not supabase_key:
        logger.warning("Supabase credentials not configured. Remote sync will be disabled.")
        return None

    try:
        return create_client(supabase_url, supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        return None
