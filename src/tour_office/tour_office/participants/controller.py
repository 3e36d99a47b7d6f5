from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import export_rows, handle_errors, json_body, login_required, optional_int_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/participants", methods=["GET"], endpoint="list_participants")
    @login_required
    @handle_errors
    def list_participants():
        participants = container.participant_service.list_participants(
            group_id=optional_int_arg("group_id"),
            search=request.args.get("q"),
        )
        rows = [p.to_dict() for p in participants]
        return export_rows(rows, title="Katılımcılar", filename="katilimcilar")

    @app.route("/api/participants/<int:participant_id>", methods=["GET"], endpoint="get_participant")
    @login_required
    @handle_errors
    def get_participant(participant_id: int):
        return jsonify(container.participant_service.get_participant(participant_id).to_dict())

    @app.route("/api/participants", methods=["POST"], endpoint="create_participant")
    @login_required
    @handle_errors
    def create_participant():
        participant = container.participant_service.create_participant(json_body())
        return jsonify(participant.to_dict()), 201

    @app.route("/api/participants/<int:participant_id>", methods=["PUT", "PATCH"], endpoint="update_participant")
    @login_required
    @handle_errors
    def update_participant(participant_id: int):
        participant = container.participant_service.update_participant(participant_id, json_body())
        return jsonify(participant.to_dict())

    @app.route("/api/participants/<int:participant_id>", methods=["DELETE"], endpoint="delete_participant")
    @login_required
    @handle_errors
    def delete_participant(participant_id: int):
        container.participant_service.delete_participant(participant_id)
        return jsonify({"ok": True})

    @app.route("/api/participants/<int:participant_id>/balance", methods=["GET"], endpoint="participant_balance")
    @login_required
    @handle_errors
    def participant_balance(participant_id: int):
        return jsonify(container.group_report_service.statement_for(participant_id).to_dict())
