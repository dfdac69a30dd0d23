from slugify import slugify

from blogsphere.extensions import db

MAX_SLUG_LENGTH = 100


def make_slug(text):
    """Minúsculas, sin signos, espacios y guiones repetidos colapsados a un guion.

    make_slug("Hello, World!  Foo") -> "hello-world-foo"
    """
    return slugify(text or "", max_length=MAX_SLUG_LENGTH, word_boundary=True)


def generate_unique_slug(model, text, exclude_id=None):
    """Genera un slug único para `model` agregando -2, -3... si ya existe."""
    base_slug = make_slug(text) or "post"
    slug = base_slug
    i = 2
    while _slug_taken(model, slug, exclude_id):
        slug = f"{base_slug}-{i}"
        i += 1
    return slug


def _slug_taken(model, slug, exclude_id):
    query = db.session.query(model.id).filter(model.slug == slug)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None
