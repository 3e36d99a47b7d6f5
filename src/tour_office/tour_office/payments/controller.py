from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import coerce_optional_date
from ..common.web import export_rows, handle_errors, json_body, login_required, optional_int_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments", methods=["GET"], endpoint="list_payments")
    @login_required
    @handle_errors
    def list_payments():
        payments = container.payment_service.list_payments(
            participant_id=optional_int_arg("participant_id"),
            group_id=optional_int_arg("group_id"),
            start=coerce_optional_date(request.args.get("start"), "Başlangıç tarihi"),
            end=coerce_optional_date(request.args.get("end"), "Bitiş tarihi"),
        )
        return export_rows([p.to_dict() for p in payments], title="Ödemeler", filename="odemeler")

    @app.route("/api/payments/<int:payment_id>", methods=["GET"], endpoint="get_payment")
    @login_required
    @handle_errors
    def get_payment(payment_id: int):
        return jsonify(container.payment_service.get_payment(payment_id).to_dict())

    @app.route("/api/payments", methods=["POST"], endpoint="create_payment")
    @login_required
    @handle_errors
    def create_payment():
        return jsonify(container.payment_service.create_payment(json_body()).to_dict()), 201

    @app.route("/api/payments/<int:payment_id>", methods=["PUT", "PATCH"], endpoint="update_payment")
    @login_required
    @handle_errors
    def update_payment(payment_id: int):
        return jsonify(container.payment_service.update_payment(payment_id, json_body()).to_dict())

    @app.route("/api/payments/<int:payment_id>", methods=["DELETE"], endpoint="delete_payment")
    @login_required
    @handle_errors
    def delete_payment(payment_id: int):
        container.payment_service.delete_payment(payment_id)
        return jsonify({"ok": True})
