from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_date_param
from ..common.http import api_errors, json_body, ok
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.event_service

    @app.route("/eventos", methods=["GET"], endpoint="events_list")
    @api_errors("carregar eventos")
    def events_list():
        events = service.list(
            start=parse_date_param(request.args.get("from"), "Data inicial"),
            end=parse_date_param(request.args.get("to"), "Data final"),
        )
        return ok([e.to_dict() for e in events])

    @app.route("/eventos", methods=["POST"], endpoint="events_create")
    @api_errors("criar evento")
    def events_create():
        return ok(service.create(json_body()).to_dict(), 201)

    @app.route("/eventos/calendario", methods=["GET"], endpoint="events_calendar")
    @api_errors("carregar calendário")
    def events_calendar():
        today = date.today()
        try:
            year = int(request.args.get("year") or today.year)
            month = int(request.args.get("month") or today.month)
        except ValueError:
            raise ValidationError("Ano e mês devem ser inteiros") from None
        grid = service.month_grid(year=year, month=month)
        grid["days"] = [d.to_dict() for d in grid["days"]]
        return ok(grid)

    @app.route("/eventos/<int:event_id>", methods=["PUT"], endpoint="events_update")
    @api_errors("atualizar evento")
    def events_update(event_id: int):
        return ok(service.update(event_id, json_body()).to_dict())

    @app.route("/eventos/<int:event_id>", methods=["DELETE"], endpoint="events_delete")
    @api_errors("excluir evento")
    def events_delete(event_id: int):
        service.delete(event_id)
        return ok()
