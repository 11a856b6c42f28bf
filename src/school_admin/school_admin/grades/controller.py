from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.grade_service

    @app.route("/alunos/<int:student_id>/notas", methods=["GET"], endpoint="grades_list")
    @api_errors("carregar notas")
    def grades_list(student_id: int):
        return ok([g.to_dict() for g in service.list_by_student(student_id)])

    @app.route("/alunos/<int:student_id>/notas", methods=["POST"], endpoint="grades_create")
    @api_errors("lançar nota")
    def grades_create(student_id: int):
        return ok(service.create(student_id, json_body()).to_dict(), 201)

    @app.route("/alunos/<int:student_id>/notas/boletim", methods=["GET"], endpoint="grades_report")
    @api_errors("carregar boletim")
    def grades_report(student_id: int):
        return ok(service.report(student_id))

    @app.route("/alunos/<int:student_id>/notas/<int:grade_id>", methods=["DELETE"], endpoint="grades_delete")
    @api_errors("excluir nota")
    def grades_delete(student_id: int, grade_id: int):
        service.delete(student_id, grade_id)
        return ok()
