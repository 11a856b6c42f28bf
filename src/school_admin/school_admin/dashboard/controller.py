from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_date_param
from ..common.http import api_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @api_errors("carregar painel")
    def dashboard():
        today = parse_date_param(request.args.get("date"), "Data")
        return ok(container.dashboard_service.summary(today=today).to_dict())
