from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.web import admin_required, handle_errors, json_body, login_required
from ..container import Container
from ..exports.spreadsheet import XLSX_MIMETYPE


def register(app: Flask, container: Container) -> None:
    @app.route("/api/groups", methods=["GET"], endpoint="list_groups")
    @login_required
    @handle_errors
    def list_groups():
        groups = container.group_service.list_groups(status=request.args.get("status"))
        return jsonify([g.to_dict() for g in groups])

    @app.route("/api/groups/<int:group_id>", methods=["GET"], endpoint="get_group")
    @login_required
    @handle_errors
    def get_group(group_id: int):
        return jsonify(container.group_service.get_group(group_id).to_dict())

    @app.route("/api/groups", methods=["POST"], endpoint="create_group")
    @login_required
    @handle_errors
    def create_group():
        group = container.group_service.create_group(json_body())
        return jsonify(group.to_dict()), 201

    @app.route("/api/groups/<int:group_id>", methods=["PUT", "PATCH"], endpoint="update_group")
    @login_required
    @handle_errors
    def update_group(group_id: int):
        return jsonify(container.group_service.update_group(group_id, json_body()).to_dict())

    @app.route("/api/groups/<int:group_id>", methods=["DELETE"], endpoint="delete_group")
    @admin_required
    @handle_errors
    def delete_group(group_id: int):
        container.group_service.delete_group(group_id)
        return jsonify({"ok": True})

    @app.route("/api/groups/<int:group_id>/archive", methods=["POST"], endpoint="archive_group")
    @admin_required
    @handle_errors
    def archive_group(group_id: int):
        group, workbook = container.group_service.archive_group(group_id)
        filename = f"arsiv_{group.group_id}_{group.start_date.year}.xlsx"
        return send_file(workbook, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)
