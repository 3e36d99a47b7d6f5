from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import coerce_optional_date
from ..common.web import admin_required, export_rows, handle_errors, json_body, optional_int_arg
from ..container import Container
from ..ledger.totals import totals_to_dict


def register(app: Flask, container: Container) -> None:
    def _range():
        return (
            coerce_optional_date(request.args.get("start"), "Başlangıç tarihi"),
            coerce_optional_date(request.args.get("end"), "Bitiş tarihi"),
        )

    @app.route("/api/company/entries", methods=["GET"], endpoint="list_company_entries")
    @admin_required
    @handle_errors
    def list_company_entries():
        start, end = _range()
        entries = container.company_entry_service.list_entries(start=start, end=end)
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/company/entries", methods=["POST"], endpoint="create_company_entry")
    @admin_required
    @handle_errors
    def create_company_entry():
        return jsonify(container.company_entry_service.create_entry(json_body()).to_dict()), 201

    @app.route("/api/company/entries/<entry_key>", methods=["PUT", "PATCH"], endpoint="update_company_entry")
    @admin_required
    @handle_errors
    def update_company_entry(entry_key: str):
        return jsonify(container.company_entry_service.update_entry(entry_key, json_body()).to_dict())

    @app.route("/api/company/entries/<entry_key>", methods=["DELETE"], endpoint="delete_company_entry")
    @admin_required
    @handle_errors
    def delete_company_entry(entry_key: str):
        container.company_entry_service.delete_entry(entry_key)
        return jsonify({"ok": True})

    @app.route("/api/company/ledger", methods=["GET"], endpoint="company_ledger")
    @admin_required
    @handle_errors
    def company_ledger():
        start, end = _range()
        data = container.company_ledger_service.build_ledger(
            start=start,
            end=end,
            group_id=optional_int_arg("group_id"),
            sort_by=request.args.get("sort_by") or "date",
            descending=(request.args.get("order") or "desc").lower() != "asc",
        )
        payload = {
            "entries": [e.to_dict() for e in data.entries],
            "totals": totals_to_dict(data.totals),
            "monthly": {k: totals_to_dict(v) for k, v in data.monthly.items()},
            "weekly": {k: totals_to_dict(v) for k, v in data.weekly.items()},
        }
        return export_rows(
            [e.export_row() for e in data.entries],
            title="Şirket Muhasebesi",
            filename="sirket_muhasebesi",
            json_payload=payload,
        )
