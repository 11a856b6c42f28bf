from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.class_service

    @app.route("/turmas", methods=["GET"], endpoint="classes_list")
    @api_errors("carregar turmas")
    def classes_list():
        return ok([c.to_dict(student_count=n) for c, n in service.list_with_counts()])

    @app.route("/turmas", methods=["POST"], endpoint="classes_create")
    @api_errors("criar turma")
    def classes_create():
        item = service.create(json_body())
        return ok(item.to_dict(student_count=0), 201)

    @app.route("/turmas/<int:class_id>", methods=["GET"], endpoint="classes_get")
    @api_errors("carregar turma")
    def classes_get(class_id: int):
        item = service.get(class_id)
        return ok(item.to_dict(student_count=service.student_count(class_id)))

    @app.route("/turmas/<int:class_id>", methods=["PUT"], endpoint="classes_update")
    @api_errors("atualizar turma")
    def classes_update(class_id: int):
        item = service.update(class_id, json_body())
        return ok(item.to_dict(student_count=service.student_count(class_id)))

    @app.route("/turmas/<int:class_id>", methods=["DELETE"], endpoint="classes_delete")
    @api_errors("excluir turma")
    def classes_delete(class_id: int):
        service.delete(class_id)
        return ok()
