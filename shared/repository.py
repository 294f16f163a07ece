"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the translation of transport failures into
ExternalServiceError.
"""

from contextlib import contextmanager
from typing import Iterator, TypeVar, Generic

import httpx
from supabase import Client

from .exceptions import ExternalServiceError


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - ``_guard()`` context manager that turns network failures into
      ExternalServiceError so callers see a ServiceUnavailable kind

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            def get_by_id(self, user_id: str) -> Optional[User]:
                with self._guard():
                    result = self._db.table("users").select("*").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_user(result.data[0])
    """

    service_name = "database"

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @contextmanager
    def _guard(self) -> Iterator[None]:
        """Translate transport errors raised by the client."""
        try:
            yield
        except httpx.HTTPError as e:
            raise ExternalServiceError(
                f"Database unavailable: {e.__class__.__name__}",
                service=self.service_name,
            ) from e
