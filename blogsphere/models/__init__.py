# blogsphere/models/__init__.py
"""
Paquete de modelos de la aplicación.
Importa aquí los modelos para que puedan ser referenciados como:
from blogsphere.models import Post
"""
from .user import User
from .category import Category
from .post import Post
from .comment import Comment

__all__ = ["User", "Category", "Post", "Comment"]
