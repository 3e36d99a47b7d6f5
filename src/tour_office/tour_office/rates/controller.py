from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import coerce_date
from ..common.validators import require_enum
from ..common.web import handle_errors, login_required
from ..core.enums import Currency
from ..container import Container
from .cache import effective


def register(app: Flask, container: Container) -> None:
    def _payload(rates):
        data = rates.to_dict()
        data["effective"] = effective(rates, container.rate_cache.defaults).to_dict()
        return data

    @app.route("/api/rates", methods=["GET"], endpoint="get_rates")
    @login_required
    @handle_errors
    def get_rates():
        return jsonify(_payload(container.rate_cache.current()))

    @app.route("/api/rates/refresh", methods=["POST"], endpoint="refresh_rates")
    @login_required
    @handle_errors
    def refresh_rates():
        return jsonify(_payload(container.rate_cache.refresh()))

    @app.route("/api/rates/history", methods=["GET"], endpoint="rate_history")
    @login_required
    @handle_errors
    def rate_history():
        on = coerce_date(request.args.get("date"), "Tarih")
        base = require_enum((request.args.get("base") or "USD").upper(), Currency, "para birimi")
        value = container.rate_cache.provider.historical_rate(on, base)
        return jsonify({"date": on.isoformat(), "base": base.value, "TRY": value})
