from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import export_rows, handle_errors, login_required, optional_int_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/groups", methods=["GET"], endpoint="group_report")
    @login_required
    @handle_errors
    def group_report():
        rows = container.group_report_service.build_group_report(optional_int_arg("group_id"))
        return export_rows(
            [r.export_row() for r in rows],
            title="Grup Raporu",
            filename="grup_raporu",
            json_payload=[r.to_dict() for r in rows],
        )

    @app.route("/api/reports/groups/<int:group_id>/balances", methods=["GET"], endpoint="group_balances")
    @login_required
    @handle_errors
    def group_balances(group_id: int):
        statements = container.group_report_service.participant_statements(group_id)
        return jsonify([s.to_dict() for s in statements])
