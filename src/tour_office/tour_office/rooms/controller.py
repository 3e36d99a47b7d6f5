from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import export_rows, handle_errors, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/groups/<int:group_id>/rooms", methods=["GET"], endpoint="list_rooms")
    @login_required
    @handle_errors
    def list_rooms(group_id: int):
        return jsonify([r.to_dict() for r in container.room_service.list_rooms(group_id)])

    @app.route("/api/rooms", methods=["POST"], endpoint="create_room")
    @login_required
    @handle_errors
    def create_room():
        return jsonify(container.room_service.create_room(json_body()).to_dict()), 201

    @app.route("/api/rooms/<int:room_id>", methods=["PUT", "PATCH"], endpoint="update_room")
    @login_required
    @handle_errors
    def update_room(room_id: int):
        return jsonify(container.room_service.update_room(room_id, json_body()).to_dict())

    @app.route("/api/rooms/<int:room_id>", methods=["DELETE"], endpoint="delete_room")
    @login_required
    @handle_errors
    def delete_room(room_id: int):
        container.room_service.delete_room(room_id)
        return jsonify({"ok": True})

    @app.route("/api/participants/<int:participant_id>/room", methods=["PUT"], endpoint="assign_room")
    @login_required
    @handle_errors
    def assign_room(participant_id: int):
        raw = json_body().get("room_id")
        try:
            room_id = int(raw) if raw not in (None, "") else None
        except (TypeError, ValueError):
            raise ValidationError(f"Geçersiz oda: {raw!r}")
        container.room_service.assign(participant_id, room_id)
        return jsonify({"ok": True})

    @app.route("/api/groups/<int:group_id>/rooming", methods=["GET"], endpoint="rooming_list")
    @login_required
    @handle_errors
    def rooming_list(group_id: int):
        rooming = container.room_service.rooming_list(group_id)
        return export_rows(
            rooming.export_rows(),
            title="Oda Listesi",
            filename=f"oda_listesi_{group_id}",
            json_payload=rooming.to_dict(),
        )
