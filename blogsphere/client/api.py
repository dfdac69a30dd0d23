# blogsphere/client/api.py
import requests

from blogsphere.utils.logging import get_logger

logger = get_logger("client.api")

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    """Respuesta no-2xx del API, con el mensaje y los errores de validación."""

    def __init__(self, status_code, message, errors=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class BlogApiClient:
    """Servicios de posts, categorías y auth sobre requests.

    `token_provider` devuelve el token actual (o None) y se agrega como
    `Authorization: Bearer`. `on_unauthorized` se llama ante cualquier 401
    de una request que llevaba token.
    """

    def __init__(self, base_url, http=None, token_provider=None, on_unauthorized=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.token_provider = token_provider or (lambda: None)
        self.on_unauthorized = on_unauthorized
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        headers = kwargs.pop("headers", {})
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.http.request(method, self.base_url + path, headers=headers, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error("Request %s %s failed: %s", method, path, e)
            raise ApiError(None, "Could not reach the server") from e

        if response.status_code == 401 and token and self.on_unauthorized:
            self.on_unauthorized()

        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= response.status_code < 300:
            message = body.get("message") if isinstance(body, dict) else None
            errors = body.get("errors") if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or f"Request failed ({response.status_code})", errors)
        return body

    def _send_post(self, method, path, post_data, image_path=None):
        if image_path is None:
            return self._request(method, path, json=post_data)
        # multipart: los campos van como texto
        form = {k: _form_value(v) for k, v in post_data.items() if v is not None}
        with open(image_path, "rb") as fh:
            return self._request(method, path, data=form, files={"featuredImage": fh})

    # Posts
    def list_posts(self, page=1, limit=10, category=None, search=None, sort="newest"):
        params = {"page": page, "limit": limit, "sort": sort}
        if category and category != "all":
            params["category"] = category
        if search:
            params["search"] = search
        return self._request("GET", "/posts", params=params)

    def get_post(self, id_or_slug):
        return self._request("GET", f"/posts/{id_or_slug}")

    def search_posts(self, query, limit=10):
        return self._request("GET", "/posts/search", params={"q": query, "limit": limit})

    def my_posts(self, page=1, limit=10):
        return self._request("GET", "/posts/mine", params={"page": page, "limit": limit})

    def create_post(self, post_data, image_path=None):
        return self._send_post("POST", "/posts", post_data, image_path)

    def update_post(self, post_id, post_data, image_path=None):
        return self._send_post("PUT", f"/posts/{post_id}", post_data, image_path)

    def delete_post(self, post_id):
        return self._request("DELETE", f"/posts/{post_id}")

    def add_comment(self, post_id, content):
        return self._request("POST", f"/posts/{post_id}/comments", json={"content": content})

    # Categorías
    def list_categories(self):
        return self._request("GET", "/categories")

    def create_category(self, name, description=None):
        payload = {"name": name}
        if description:
            payload["description"] = description
        return self._request("POST", "/categories", json=payload)

    # Auth
    def register(self, name, email, password):
        return self._request("POST", "/auth/register", json={"name": name, "email": email, "password": password})

    def login(self, email, password):
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def me(self):
        return self._request("GET", "/auth/me")


def _form_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
