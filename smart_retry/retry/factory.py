"""Factory for creating failure stores based on configuration."""

import os

from smart_retry.configuration import get_settings
from smart_retry.logging import get_module_logger
from smart_retry.retry.store import (
    FailureStore,
    InMemoryFailureStore,
    JsonFileFailureStore,
)

logger = get_module_logger()


def create_failure_store(
    backend: str | None = None,
    file_path: str | os.PathLike | None = None,
) -> FailureStore:
    """Create the failure store selected by configuration.

    Args:
        backend: Optional backend override (file, memory).
            If None, uses settings.retry.store_backend
        file_path: Optional log path for the file backend.
            If None, uses settings.retry.log_path, then the working directory

    Returns:
        FailureStore implementation

    Raises:
        ValueError: If unknown backend specified

    Examples:
        >>> store = create_failure_store()  # Uses settings
        >>> store = create_failure_store(backend="memory")
        >>> store = create_failure_store(file_path="/var/log/failed.json")
    """
    retry_settings = get_settings().retry
    backend = (backend or retry_settings.store_backend).lower()

    if backend == "memory":
        logger.debug("creating_in_memory_failure_store")
        return InMemoryFailureStore()

    if backend == "file":
        path = file_path or retry_settings.log_path or None
        store = JsonFileFailureStore(path)
        logger.debug("creating_json_file_failure_store", path=str(store.file_path))
        return store

    raise ValueError(f"Unknown failure store backend: {backend}. Supported: file, memory")
