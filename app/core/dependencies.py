"""
Dependency injection for FastAPI endpoints.
"""
from functools import lru_cache

from app.core.config import settings
from app.services.database import DatabaseService


@lru_cache()
def get_database_service() -> DatabaseService:
    """
    Create and cache a DatabaseService instance.

    Using lru_cache gives every request the same Supabase client, while tests
    can still swap it out through ``app.dependency_overrides``.
    """
    return DatabaseService(
        url=settings.supabase_url,
        key=settings.supabase_key
    )
