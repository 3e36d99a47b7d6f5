from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import coerce_optional_date
from ..common.web import export_rows, handle_errors, json_body, login_required, optional_int_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/expenses", methods=["GET"], endpoint="list_expenses")
    @login_required
    @handle_errors
    def list_expenses():
        expenses = container.expense_service.list_expenses(
            group_id=optional_int_arg("group_id"),
            start=coerce_optional_date(request.args.get("start"), "Başlangıç tarihi"),
            end=coerce_optional_date(request.args.get("end"), "Bitiş tarihi"),
        )
        return export_rows([e.to_dict() for e in expenses], title="Giderler", filename="giderler")

    @app.route("/api/expenses/<int:expense_id>", methods=["GET"], endpoint="get_expense")
    @login_required
    @handle_errors
    def get_expense(expense_id: int):
        return jsonify(container.expense_service.get_expense(expense_id).to_dict())

    @app.route("/api/expenses", methods=["POST"], endpoint="create_expense")
    @login_required
    @handle_errors
    def create_expense():
        return jsonify(container.expense_service.create_expense(json_body()).to_dict()), 201

    @app.route("/api/expenses/<int:expense_id>", methods=["PUT", "PATCH"], endpoint="update_expense")
    @login_required
    @handle_errors
    def update_expense(expense_id: int):
        return jsonify(container.expense_service.update_expense(expense_id, json_body()).to_dict())

    @app.route("/api/expenses/<int:expense_id>", methods=["DELETE"], endpoint="delete_expense")
    @login_required
    @handle_errors
    def delete_expense(expense_id: int):
        container.expense_service.delete_expense(expense_id)
        return jsonify({"ok": True})
