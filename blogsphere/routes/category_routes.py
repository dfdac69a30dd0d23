from flask import Blueprint, jsonify

from blogsphere.auth.decorators import login_required
from blogsphere.routes import request_data
from blogsphere.services import category_service

category_bp = Blueprint("categories", __name__)


@category_bp.route("", methods=["GET"], strict_slashes=False)
def get_categories():
    return jsonify([c.to_dict() for c in category_service.list_categories()]), 200


@category_bp.route("", methods=["POST"], strict_slashes=False)
@login_required
def create_category():
    category = category_service.create_category(request_data())
    return jsonify(category.to_dict()), 201
