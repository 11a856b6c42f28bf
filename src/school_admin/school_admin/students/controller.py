from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/alunos", methods=["GET"], endpoint="students_list")
    @api_errors("carregar alunos")
    def students_list():
        return ok([s.to_dict() for s in container.student_service.list()])

    @app.route("/alunos", methods=["POST"], endpoint="students_create")
    @api_errors("cadastrar aluno")
    def students_create():
        student = container.student_service.create(json_body())
        return ok(student.to_dict(), 201)

    @app.route("/alunos/roster", methods=["GET"], endpoint="students_roster")
    @api_errors("carregar alunos do turno")
    def students_roster():
        roster = container.student_service.roster(
            shift=request.args.get("turno", ""),
            class_id=request.args.get("turmaId"),
        )
        return ok([s.to_dict() for s in roster])

    @app.route("/alunos/<int:student_id>", methods=["GET"], endpoint="students_get")
    @api_errors("carregar aluno")
    def students_get(student_id: int):
        return ok(container.student_service.get(student_id).to_dict())

    @app.route("/alunos/<int:student_id>", methods=["PUT"], endpoint="students_update")
    @api_errors("atualizar aluno")
    def students_update(student_id: int):
        student = container.student_service.update(student_id, json_body())
        return ok(student.to_dict())

    @app.route("/alunos/<int:student_id>", methods=["DELETE"], endpoint="students_delete")
    @api_errors("excluir aluno")
    def students_delete(student_id: int):
        container.student_service.delete(student_id)
        return ok()
