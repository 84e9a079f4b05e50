"""
Base service class for the Knowledge Heroes engine.

Provides repository injection and retry logic for all service layer operations.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from heroes.config import Config
from heroes.utils.progression_exceptions import DatabaseError, TransactionError

logger = logging.getLogger(__name__)

class BaseService:
    """Base class for all services with repository access and retry handling."""

    def __init__(self, repository):
        """
        Initialize base service with a repository.

        Args:
            repository: ProgressionRepository implementation
        """
        self.repository = repository

    async def execute_with_retry(
        self,
        func: Callable[[], Awaitable[Any]],
        operation: str = "operation",
        max_retries: int = None
    ) -> Any:
        """Execute a function with automatic retry on database errors."""
        max_retries = max_retries or Config.MAX_DB_RETRIES
        for attempt in range(max_retries):
            try:
                return await func()
            except DatabaseError as e:
                if attempt == max_retries - 1:
                    logger.error(f"{operation} failed after {max_retries} attempts: {e}")
                    raise TransactionError(operation, max_retries) from e
                logger.warning(f"Retry attempt {attempt + 1} for {operation}: {e}")
                await asyncio.sleep(min(0.1 * (2 ** attempt), 1.0))  # Exponential backoff
