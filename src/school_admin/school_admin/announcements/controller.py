from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, json_body, ok
from ..common.validators import parse_bool
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.announcement_service

    @app.route("/avisos", methods=["GET"], endpoint="announcements_list")
    @api_errors("carregar avisos")
    def announcements_list():
        items = service.list(
            include_inactive=parse_bool(request.args.get("includeInactive"), default=False),
            search=request.args.get("q"),
        )
        return ok([a.to_dict() for a in items])

    @app.route("/avisos", methods=["POST"], endpoint="announcements_create")
    @api_errors("criar aviso")
    def announcements_create():
        return ok(service.create(json_body()).to_dict(), 201)

    @app.route("/avisos/<int:announcement_id>", methods=["PUT"], endpoint="announcements_update")
    @api_errors("atualizar aviso")
    def announcements_update(announcement_id: int):
        return ok(service.update(announcement_id, json_body()).to_dict())

    @app.route("/avisos/<int:announcement_id>", methods=["DELETE"], endpoint="announcements_delete")
    @api_errors("excluir aviso")
    def announcements_delete(announcement_id: int):
        service.delete(announcement_id)
        return ok()
