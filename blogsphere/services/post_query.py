"""Listado público de posts: filtros, búsqueda, orden y paginación.

Un `PostQuery` describe la petición (página, tamaño, categoría, texto y
orden). `search_posts` construye la consulta sobre `Post`, siempre limitada
a posts publicados, y devuelve un `PostPage` con los items de la página y
los metadatos de paginación calculados sobre el total sin paginar.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from flask import current_app
from sqlalchemy import or_

from blogsphere.errors import ValidationError
from blogsphere.models import Category, Post
from blogsphere.utils.validation import parse_int

ALL_CATEGORIES = "all"
DEFAULT_SORT = "newest"

SORT_ALIASES = {
    "newest": "newest",
    "-createdAt": "newest",
    "oldest": "oldest",
    "createdAt": "oldest",
    "mostViewed": "mostViewed",
    "-viewCount": "mostViewed",
    "titleAscending": "titleAscending",
    "title": "titleAscending",
}


def _sort_columns(sort_key):
    # el id al final deja el orden total aunque haya empates
    if sort_key == "oldest":
        return [Post.created_at.asc(), Post.id.asc()]
    if sort_key == "mostViewed":
        return [Post.view_count.desc(), Post.created_at.desc(), Post.id.desc()]
    if sort_key == "titleAscending":
        return [Post.title.asc(), Post.id.asc()]
    return [Post.created_at.desc(), Post.id.desc()]


def normalize_sort(value):
    if value is None or value == "":
        return DEFAULT_SORT
    try:
        return SORT_ALIASES[value]
    except KeyError:
        raise ValidationError([{
            "field": "sort",
            "message": "sort must be one of: newest, oldest, mostViewed, titleAscending",
        }])


def escape_like(text):
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class PostQuery:
    page: int = 1
    page_size: int = 10
    category: Optional[str] = None
    search: Optional[str] = None
    sort: str = DEFAULT_SORT

    def __post_init__(self):
        # páginas y tamaños menores a 1 se llevan a 1
        self.page = max(1, self.page)
        self.page_size = max(1, self.page_size)
        if self.search is not None:
            self.search = self.search.strip() or None
        if self.category == "":
            self.category = None
        self.sort = normalize_sort(self.sort)

    @property
    def skip(self):
        return (self.page - 1) * self.page_size

    @classmethod
    def from_args(cls, args, default_page_size=None, max_page_size=None):
        """Construye la consulta desde los query params (?page&limit&category&search&sort)."""
        if default_page_size is None:
            default_page_size = current_app.config["DEFAULT_PAGE_SIZE"]
        if max_page_size is None:
            max_page_size = current_app.config["MAX_PAGE_SIZE"]

        page = parse_int(args.get("page"), "page", default=1)
        page_size = parse_int(args.get("limit", args.get("pageSize")), "limit", default=default_page_size)
        page_size = min(page_size, max_page_size)
        return cls(
            page=page,
            page_size=page_size,
            category=args.get("category"),
            search=args.get("search"),
            sort=args.get("sort"),
        )


@dataclass
class PostPage:
    items: List[Post]
    total: int
    current_page: int
    page_size: int

    @property
    def total_pages(self):
        return math.ceil(self.total / self.page_size)

    def to_dict(self):
        return {
            "posts": [p.to_summary_dict() for p in self.items],
            "totalPages": self.total_pages,
            "currentPage": self.current_page,
            "total": self.total,
            "pageSize": self.page_size,
        }


def search_filter(text):
    pattern = f"%{escape_like(text)}%"
    return or_(
        Post.title.ilike(pattern, escape="\\"),
        Post.content.ilike(pattern, escape="\\"),
        Post.excerpt.ilike(pattern, escape="\\"),
    )


def build_query(post_query):
    """Consulta sin paginar: publicados + categoría + búsqueda."""
    query = Post.query.filter(Post.is_published.is_(True))

    category = post_query.category
    if category is not None and category != ALL_CATEGORIES:
        if category.isdigit():
            query = query.filter(Post.category_id == int(category))
        else:
            query = query.join(Category, Post.category_id == Category.id).filter(Category.slug == category)

    if post_query.search:
        query = query.filter(search_filter(post_query.search))

    return query


def search_posts(post_query):
    query = build_query(post_query)
    pagination = query.order_by(*_sort_columns(post_query.sort)).paginate(
        page=post_query.page,
        per_page=post_query.page_size,
        error_out=False,
        count=True,
    )
    return PostPage(
        items=list(pagination.items),
        total=pagination.total,
        current_page=post_query.page,
        page_size=post_query.page_size,
    )


def quick_search(text, limit=10):
    """Búsqueda directa (GET /posts/search): lista plana, sin metadatos."""
    text = (text or "").strip()
    if not text:
        raise ValidationError([{"field": "q", "message": "Search query is required"}])
    return (
        Post.query.filter(Post.is_published.is_(True), search_filter(text))
        .order_by(*_sort_columns(DEFAULT_SORT))
        .limit(max(1, limit))
        .all()
    )
