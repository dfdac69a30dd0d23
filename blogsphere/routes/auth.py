# blogsphere/routes/auth.py
from flask import Blueprint, jsonify, g

from blogsphere.auth.decorators import login_required
from blogsphere.routes import request_data
from blogsphere.services import auth_service

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request_data()
    user = auth_service.register(data.get("name"), data.get("email"), data.get("password"))
    return jsonify({"message": "Account created successfully", "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request_data()
    token, user = auth_service.login(data.get("email"), data.get("password"))
    return jsonify({"token": token, "user": user.to_dict()}), 200


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify(g.current_user.to_dict()), 200
