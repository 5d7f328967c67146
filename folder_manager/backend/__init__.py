"""Document-management backends the folder service can talk to."""
from .base import BackendError, FileManagementBackend
from .http import HttpFileManagementBackend
from .memory import InMemoryBackend

__all__ = [
    "BackendError",
    "FileManagementBackend",
    "HttpFileManagementBackend",
    "InMemoryBackend",
]
