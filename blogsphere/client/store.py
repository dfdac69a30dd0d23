# blogsphere/client/store.py
import json
import os

from blogsphere.utils.logging import get_logger

logger = get_logger("client.store")

DEFAULT_CREDENTIALS_PATH = os.path.join(os.path.expanduser("~"), ".blogsphere", "credentials.json")


class MemoryCredentialStore:
    """Credenciales solo en memoria; se pierden al cerrar el proceso."""

    def __init__(self, token=None, user=None):
        self.token = token
        self.user = user

    def load(self):
        return self.token, self.user

    def save(self, token, user):
        self.token, self.user = token, user

    def clear(self):
        self.token, self.user = None, None


class FileCredentialStore:
    """Guarda el par token + usuario en un archivo JSON local."""

    def __init__(self, path=DEFAULT_CREDENTIALS_PATH):
        self.path = path

    def load(self):
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return None, None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable credentials file %s: %s", self.path, e)
            return None, None
        if not isinstance(data, dict):
            return None, None
        return data.get("token"), data.get("user")

    def save(self, token, user):
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump({"token": token, "user": user}, fh)
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", self.path)

    def clear(self):
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
