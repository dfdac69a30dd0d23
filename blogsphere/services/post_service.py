"""Operaciones de escritura y lectura individual de posts y comentarios."""

from sqlalchemy.exc import SQLAlchemyError

from blogsphere.errors import AuthorizationError, NotFoundError, ServerError
from blogsphere.extensions import db
from blogsphere.models import Category, Comment, Post
from blogsphere.utils.logging import get_logger
from blogsphere.utils.slugs import generate_unique_slug
from blogsphere.utils.uploads import discard_image, store_image
from blogsphere.utils.validation import FieldErrors, clean_text, parse_bool

logger = get_logger("posts")

TITLE_MESSAGE = "Title is required and must be less than 100 characters"
CONTENT_MESSAGE = "Content is required"
EXCERPT_MESSAGE = "Excerpt must be less than 200 characters"
CATEGORY_MESSAGE = "Valid category is required"
COMMENT_MESSAGE = "Comment content is required and must be less than 500 characters"
NOT_AUTHORIZED_MESSAGE = "Not authorized to modify this post"
MAX_ID = 2**63 - 1


def _resolve_category(value, errors):
    """None / "" = sin categoría. Cualquier otro valor debe existir."""
    if value is None or value == "":
        return None
    # solo enteros o texto con dígitos; True o 1.7 no son ids
    if isinstance(value, int) and not isinstance(value, bool):
        category_id = value
    elif isinstance(value, str) and value.strip().isdecimal():
        category_id = int(value.strip())
    else:
        errors.add("category", CATEGORY_MESSAGE)
        return None
    if not 0 < category_id <= MAX_ID:
        errors.add("category", CATEGORY_MESSAGE)
        return None
    category = db.session.get(Category, category_id)
    if category is None:
        errors.add("category", CATEGORY_MESSAGE)
    return category


def _validate_post_fields(data, partial=False):
    """Valida el cuerpo de un post. Con partial=True solo los campos presentes."""
    errors = FieldErrors()
    fields = {}

    if not partial or "title" in data:
        fields["title"] = clean_text(data, "title", errors, required=True, max_length=100, message=TITLE_MESSAGE)
    if not partial or "content" in data:
        fields["content"] = clean_text(data, "content", errors, required=True, message=CONTENT_MESSAGE)
    if "excerpt" in data:
        fields["excerpt"] = clean_text(data, "excerpt", errors, max_length=200, message=EXCERPT_MESSAGE) or None
    if "category" in data:
        fields["category"] = _resolve_category(data.get("category"), errors)
    if "isPublished" in data:
        fields["is_published"] = parse_bool(data, "isPublished", errors)
    if "featuredImage" in data:
        image = data.get("featuredImage")
        if image is not None and not isinstance(image, str):
            errors.add("featuredImage", "featuredImage must be a URL or an uploaded file")
        else:
            fields["featured_image"] = (image or "").strip() or None

    errors.raise_if_any()
    return fields


def _commit(action, uploaded=None):
    """Commit de la operación. Si falla, se borra la imagen recién subida."""
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error while trying to %s", action)
        discard_image(uploaded)
        raise ServerError(f"Could not {action}")


def _discard_unused_image(stored):
    # otro post puede apuntar al mismo archivo subido por /upload-image
    if not stored:
        return
    if Post.query.filter(Post.featured_image == stored).first() is None:
        discard_image(stored)


def _get_post_or_404(post_id):
    post = db.session.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def _check_owner(post, user):
    # mismo mensaje siempre, no dar pistas
    if user is None or post.author_id != user.id:
        raise AuthorizationError(NOT_AUTHORIZED_MESSAGE)


# 🟢 Crear
def create_post(author, data, image=None):
    fields = _validate_post_fields(data)
    slug = generate_unique_slug(Post, fields["title"])
    uploaded = store_image(image) if image is not None else None

    post = Post(
        title=fields["title"],
        slug=slug,
        content=fields["content"],
        excerpt=fields.get("excerpt"),
        featured_image=uploaded or fields.get("featured_image"),
        category=fields.get("category"),
        author=author,
        is_published=bool(fields.get("is_published") or False),
    )
    db.session.add(post)
    _commit("create the post", uploaded=uploaded)
    logger.info("Post %s created by user %s", post.id, author.id)
    return post


# 🟡 Editar (solo el autor)
def update_post(post_id, user, data, image=None):
    post = _get_post_or_404(post_id)
    _check_owner(post, user)

    fields = _validate_post_fields(data, partial=True)
    previous_image = post.featured_image

    # el slug se regenera solo si el título cambió
    if "title" in fields and fields["title"] != post.title:
        post.slug = generate_unique_slug(Post, fields["title"], exclude_id=post.id)

    uploaded = None
    if image is not None:
        uploaded = fields["featured_image"] = store_image(image)

    for attr in ("title", "content", "excerpt", "featured_image", "category", "is_published"):
        if attr in fields and not (attr == "is_published" and fields[attr] is None):
            setattr(post, attr, fields[attr])

    _commit("update the post", uploaded=uploaded)
    if previous_image and previous_image != post.featured_image:
        _discard_unused_image(previous_image)
    logger.info("Post %s updated by user %s", post.id, user.id)
    return post


# 🔴 Borrar (solo el autor), con su imagen
def delete_post(post_id, user):
    post = _get_post_or_404(post_id)
    _check_owner(post, user)
    image = post.featured_image
    db.session.delete(post)
    _commit("delete the post")
    _discard_unused_image(image)
    logger.info("Post %s deleted by user %s", post_id, user.id)


# 🔵 Ver un solo post (por ID o slug)
def get_post(identifier, viewer=None):
    """Busca por id si el identificador es numérico y si no, o si falla, por slug.

    Los borradores solo los ve su autor.
    """
    identifier = str(identifier)
    post = None
    if identifier.isdigit():
        post = db.session.get(Post, int(identifier))
    if post is None:
        post = Post.query.filter_by(slug=identifier).first()

    if post is None or (not post.is_published and (viewer is None or viewer.id != post.author_id)):
        raise NotFoundError("Post not found")
    return post


def record_view(post):
    """Incrementa view_count con un solo UPDATE atómico, sin tocar updated_at."""
    Post.query.filter_by(id=post.id).update(
        {Post.view_count: Post.view_count + 1, Post.updated_at: Post.updated_at},
        synchronize_session=False,
    )
    _commit("record the view")
    db.session.refresh(post)
    return post


def list_author_posts(user, page=1, page_size=10):
    return (
        Post.query.filter_by(author_id=user.id)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .paginate(page=max(1, page), per_page=max(1, page_size), error_out=False)
    )


# 💬 Comentarios
def add_comment(post_id, user, data):
    errors = FieldErrors()
    content = clean_text(data, "content", errors, required=True, max_length=500, message=COMMENT_MESSAGE)
    errors.raise_if_any()

    post = db.session.get(Post, post_id)
    if post is None or (not post.is_published and post.author_id != user.id):
        raise NotFoundError("Post not found")

    comment = Comment(post_id=post.id, author=user, content=content)
    db.session.add(comment)
    _commit("add the comment")
    logger.info("Comment %s added to post %s", comment.id, post.id)
    return comment
