from sqlalchemy import func, select
from sqlalchemy.orm import column_property

from blogsphere.extensions import db
from blogsphere.utils.uploads import image_url
from .base import utcnow, isoformat
from .comment import Comment


# blogsphere/models/post.py
class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)

    # 🧠 Contenido principal
    title = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.String(200), nullable=True)

    # 🖼️ Imagen destacada: nombre de archivo generado o URL absoluta
    featured_image = db.Column(db.String(500), nullable=True)

    # 🗂️ Categoría opcional
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    category = db.relationship("Category", lazy="joined")

    # 👤 Autor, inmutable después de crear el post
    author_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    author = db.relationship("User", lazy="joined")

    is_published = db.Column(db.Boolean, nullable=False, default=False, index=True)
    view_count = db.Column(db.Integer, nullable=False, default=0)

    # ⏰ Timestamps
    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    comments = db.relationship(
        "Comment",
        order_by=[Comment.created_at, Comment.id],
        cascade="all, delete-orphan",
        lazy="select",
    )

    # se cuenta en la misma consulta del listado, sin cargar los comentarios
    comment_count = column_property(
        select(func.count(Comment.id))
        .where(Comment.post_id == id)
        .correlate_except(Comment)
        .scalar_subquery()
    )

    def _author_dict(self):
        return {"id": self.author.id, "name": self.author.name} if self.author else None

    def _category_dict(self):
        if not self.category:
            return None
        return {"id": self.category.id, "name": self.category.name, "slug": self.category.slug}

    def to_summary_dict(self):
        """Proyección corta usada en listados y búsquedas."""
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "excerpt": self.excerpt,
            "featuredImage": image_url(self.featured_image),
            "createdAt": isoformat(self.created_at),
            "author": self._author_dict(),
            "category": self._category_dict(),
            "viewCount": self.view_count,
            "commentCount": self.comment_count,
        }

    # ✅ Post completo, con autor, categoría y comentarios
    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "excerpt": self.excerpt,
            "featuredImage": image_url(self.featured_image),
            "category": self._category_dict(),
            "author": self._author_dict(),
            "isPublished": self.is_published,
            "viewCount": self.view_count,
            "comments": [c.to_dict() for c in self.comments],
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Post {self.title}>"
