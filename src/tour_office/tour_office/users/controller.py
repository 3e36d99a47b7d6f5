from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_role, handle_errors, json_body, login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @handle_errors
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["username"] = s_user.username
        session["role"] = s_user.role.value

        return jsonify(
            {
                "user_id": s_user.user_id,
                "full_name": s_user.full_name,
                "username": s_user.username,
                "role": s_user.role.value,
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "user_id": session["user_id"],
                "full_name": session.get("name"),
                "username": session.get("username"),
                "role": session.get("role"),
            }
        )

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    @handle_errors
    def list_users():
        users = container.user_service.list_users(current_role=current_role())
        return jsonify([u.to_public_dict() for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    @handle_errors
    def create_user():
        data = json_body()
        user = container.user_service.create_account(
            current_role=current_role(),
            full_name=data.get("full_name", ""),
            username=data.get("username", ""),
            password=data.get("password", ""),
            role=data.get("role") or "staff",
        )
        return jsonify(user.to_public_dict()), 201

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    @handle_errors
    def delete_user(user_id: int):
        container.user_service.delete_user(current_role=current_role(), user_id=user_id)
        return jsonify({"ok": True})
