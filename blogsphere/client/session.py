"""Estado de sesión del cliente.

Un único `SessionController` es dueño del usuario actual y del token
guardado. Las pantallas lo reciben inyectado y se suscriben a sus cambios.
La regla "401 => salir y volver a /auth" vive solo acá: el controlador se
registra como `on_unauthorized` del `BlogApiClient`, así que aplica a
cualquier operación.
"""

import enum

from blogsphere.utils.logging import get_logger
from .api import ApiError, BlogApiClient
from .store import MemoryCredentialStore

logger = get_logger("client.session")

SIGN_IN_ROUTE = "/auth"


class SessionState(enum.Enum):
    UNKNOWN = "unknown"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class SessionError(Exception):
    """Error recuperable de sign-in / sign-up; la sesión sigue anónima."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class SessionController:
    def __init__(self, base_url=None, store=None, navigate=None, http=None, api=None):
        self.store = store or MemoryCredentialStore()
        self.navigate = navigate or (lambda route: None)
        self.state = SessionState.UNKNOWN
        self.user = None
        self._token = None
        self._listeners = []

        if api is None:
            api = BlogApiClient(base_url, http=http)
        api.token_provider = self.token
        api.on_unauthorized = self.handle_unauthorized
        self.api = api

    # estado

    def token(self):
        return self._token

    @property
    def is_authenticated(self):
        return self.state is SessionState.AUTHENTICATED

    def subscribe(self, listener):
        """listener(state, user). Devuelve una función para desuscribirse."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, state, user=None, token=None):
        self.state = state
        self.user = user
        self._token = token
        logger.debug("Session state -> %s", state.value)
        for listener in list(self._listeners):
            listener(state, user)

    # transiciones

    def start(self):
        """Hidrata la sesión desde el almacenamiento local, sin tocar el servidor."""
        self._transition(SessionState.LOADING)
        token, user = self.store.load()
        if token and user:
            self._transition(SessionState.AUTHENTICATED, user=user, token=token)
        else:
            self._transition(SessionState.ANONYMOUS)
        return self.state

    def sign_in(self, email, password):
        try:
            data = self.api.login(email, password)
        except ApiError as e:
            logger.info("Sign in failed: %s", e.message)
            self._become_anonymous()
            raise SessionError(e.message or "Login failed", e.errors) from e

        token, user = data.get("token"), data.get("user")
        if not token or not user:
            self._become_anonymous()
            raise SessionError("Login failed")
        self.store.save(token, user)
        self._transition(SessionState.AUTHENTICATED, user=user, token=token)
        return user

    def sign_up(self, name, email, password):
        try:
            self.api.register(name, email, password)
        except ApiError as e:
            logger.info("Sign up failed: %s", e.message)
            self._become_anonymous()
            raise SessionError(e.message or "Registration failed", e.errors) from e
        return self.sign_in(email, password)

    def sign_out(self):
        self.store.clear()
        self._transition(SessionState.ANONYMOUS)

    def handle_unauthorized(self):
        """Token inválido o vencido: descartar credencial y mandar al sign-in."""
        logger.warning("Session expired or token rejected, signing out")
        self.sign_out()
        self.navigate(SIGN_IN_ROUTE)

    def _become_anonymous(self):
        if self.state is not SessionState.ANONYMOUS:
            self._transition(SessionState.ANONYMOUS)
