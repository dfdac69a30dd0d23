# blogsphere/routes/upload_routes.py
from flask import Blueprint, request, jsonify, current_app, send_from_directory

from blogsphere.auth.decorators import login_required
from blogsphere.errors import ValidationError
from blogsphere.utils.uploads import store_image, image_url

upload_bp = Blueprint("upload", __name__)


@upload_bp.route("/upload-image", methods=["POST"])
@login_required
def upload_image():
    if "image" not in request.files:
        raise ValidationError([{"field": "image", "message": "No 'image' file found"}])

    stored = store_image(request.files["image"], field="image")
    return jsonify({"filename": stored, "url": image_url(stored)}), 201


@upload_bp.route("/uploads/<path:filename>", methods=["GET"])
def serve_upload(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)
