from flask import Blueprint, request, jsonify, g, current_app

from blogsphere.auth.decorators import login_required
from blogsphere.routes import request_data
from blogsphere.services import post_service
from blogsphere.services.post_query import PostQuery, search_posts, quick_search
from blogsphere.utils.validation import parse_int

post_bp = Blueprint("posts", __name__)


def _uploaded_image():
    image = request.files.get("featuredImage")
    return image if image and image.filename else None


# 🟣 Listar posts (paginado + filtros opcionales)
@post_bp.route("", methods=["GET"], strict_slashes=False)
def get_posts():
    post_query = PostQuery.from_args(request.args)
    page = search_posts(post_query)
    return jsonify(page.to_dict()), 200


# 🔎 Búsqueda directa
@post_bp.route("/search", methods=["GET"])
def search():
    limit = parse_int(request.args.get("limit"), "limit", default=current_app.config["DEFAULT_PAGE_SIZE"])
    limit = min(limit, current_app.config["MAX_PAGE_SIZE"])
    posts = quick_search(request.args.get("q"), limit=limit)
    return jsonify([p.to_summary_dict() for p in posts]), 200


# 📝 Mis posts, incluidos borradores
@post_bp.route("/mine", methods=["GET"])
@login_required
def get_my_posts():
    page = parse_int(request.args.get("page"), "page", default=1)
    per_page = min(
        parse_int(request.args.get("limit"), "limit", default=current_app.config["DEFAULT_PAGE_SIZE"]),
        current_app.config["MAX_PAGE_SIZE"],
    )
    pagination = post_service.list_author_posts(g.current_user, page, per_page)
    return jsonify({
        "posts": [p.to_dict() for p in pagination.items],
        "total": pagination.total,
        "currentPage": pagination.page,
        "totalPages": pagination.pages,
    }), 200


# 🔵 Ver un solo post (por ID o slug)
@post_bp.route("/<string:identifier>", methods=["GET"])
def get_post_detail(identifier):
    post = post_service.get_post(identifier, viewer=g.current_user)
    post_service.record_view(post)
    return jsonify(post.to_dict()), 200


# 🟢 Crear un nuevo post
@post_bp.route("", methods=["POST"], strict_slashes=False)
@login_required
def create_post():
    post = post_service.create_post(g.current_user, request_data(), image=_uploaded_image())
    current_app.logger.info("Post creado: %s", post.slug)
    return jsonify(post.to_dict()), 201


# 🟡 Editar post (solo dueño)
@post_bp.route("/<int:id>", methods=["PUT"])
@login_required
def edit_post(id):
    post = post_service.update_post(id, g.current_user, request_data(), image=_uploaded_image())
    return jsonify(post.to_dict()), 200


# 🔴 Borrar post (solo dueño)
@post_bp.route("/<int:id>", methods=["DELETE"])
@login_required
def delete_post(id):
    post_service.delete_post(id, g.current_user)
    return jsonify({"message": "Post deleted"}), 200


# 💬 Agregar comentario
@post_bp.route("/<int:id>/comments", methods=["POST"])
@login_required
def add_comment(id):
    comment = post_service.add_comment(id, g.current_user, request_data())
    return jsonify(comment.to_dict()), 201
