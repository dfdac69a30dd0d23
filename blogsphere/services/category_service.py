from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from blogsphere.errors import ValidationError
from blogsphere.extensions import db
from blogsphere.models import Category
from blogsphere.utils.logging import get_logger
from blogsphere.utils.slugs import generate_unique_slug
from blogsphere.utils.validation import FieldErrors, clean_text

logger = get_logger("categories")

CATEGORY_NAME_MESSAGE = "Category name is required and must be less than 50 characters"


def list_categories():
    return Category.query.order_by(Category.name.asc()).all()


def create_category(data):
    errors = FieldErrors()
    name = clean_text(data, "name", errors, required=True, max_length=50, message=CATEGORY_NAME_MESSAGE)
    description = clean_text(data, "description", errors, max_length=255)
    errors.raise_if_any()

    exists = Category.query.filter(func.lower(Category.name) == name.lower()).first()
    if exists:
        raise ValidationError([{"field": "name", "message": "Category already exists"}])

    category = Category(
        name=name,
        slug=generate_unique_slug(Category, name),
        description=description or None,
    )
    try:
        db.session.add(category)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError([{"field": "name", "message": "Category already exists"}])

    logger.info("Created category %s (%s)", category.name, category.slug)
    return category
