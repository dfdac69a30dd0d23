"""Cliente Python del API: servicios HTTP y controlador de sesión."""

from .api import ApiError, BlogApiClient
from .session import SessionController, SessionError, SessionState
from .store import FileCredentialStore, MemoryCredentialStore

__all__ = [
    "ApiError",
    "BlogApiClient",
    "SessionController",
    "SessionError",
    "SessionState",
    "FileCredentialStore",
    "MemoryCredentialStore",
]
