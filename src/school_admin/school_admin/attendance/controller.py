from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_date_param
from ..common.http import api_errors, json_body, ok
from ..core.constants import ALL_CLASSES, DEFAULT_HISTORY_PERIOD
from ..core.exceptions import ValidationError
from ..container import Container
from ..students.service import parse_class_id


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _class_param(value):
        return None if value == ALL_CLASSES else parse_class_id(value)

    def _required_date(value, field_name: str) -> date:
        parsed = parse_date_param(value, field_name)
        if parsed is None:
            raise ValidationError(f"{field_name} é obrigatória")
        return parsed

    def _int_param(name: str, default: int = 0) -> int:
        raw = request.args.get(name)
        if raw in (None, ""):
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValidationError(f"Parâmetro {name} deve ser inteiro") from None

    @app.route("/presencas", methods=["GET"], endpoint="attendance_list")
    @api_errors("carregar presenças")
    def attendance_list():
        records = service.list_by_date_shift(
            on=_required_date(request.args.get("date"), "Data"),
            shift=request.args.get("turno", ""),
            class_id=_class_param(request.args.get("turmaId")),
        )
        return ok([r.to_dict() for r in records])

    @app.route("/presencas/chamada", methods=["GET"], endpoint="attendance_call_load")
    @api_errors("carregar chamada")
    def attendance_call_load():
        view = service.load_call(
            on=parse_date_param(request.args.get("date"), "Data") or date.today(),
            shift=request.args.get("turno", ""),
            class_id=_class_param(request.args.get("turmaId")),
        )
        return ok(view.to_dict())

    @app.route("/presencas/chamada", methods=["POST"], endpoint="attendance_call_save")
    @api_errors("salvar chamada")
    def attendance_call_save():
        body = json_body()
        entries = body.get("records")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ValidationError("records deve ser uma lista")
        saved = service.save_call(
            on=_required_date(body.get("date"), "Data"),
            shift=body.get("turno", ""),
            class_id=_class_param(body.get("turmaId")),
            entries=entries,
        )
        return ok([r.to_dict() for r in saved])

    @app.route("/presencas/history", methods=["GET"], endpoint="attendance_history")
    @api_errors("carregar histórico de chamadas")
    def attendance_history():
        start = parse_date_param(request.args.get("from"), "Data inicial")
        end = parse_date_param(request.args.get("to"), "Data final")
        day = parse_date_param(request.args.get("day"), "Dia")
        if (start is None) != (end is None):
            raise ValidationError("Informe as duas datas do intervalo (from e to)")
        if start is None:
            window = service.resolve_window(
                period=request.args.get("period") or DEFAULT_HISTORY_PERIOD,
                anchor=parse_date_param(request.args.get("anchor"), "Data de referência") or date.today(),
                offset=_int_param("offset"),
            )
            start, end = window

        kwargs = dict(
            shift=request.args.get("turno", ""),
            start=start,
            end=end,
            class_id=_class_param(request.args.get("turmaId")),
            day=day,
        )
        if request.args.get("group") == "calls":
            return ok([c.to_dict() for c in service.history_calls(**kwargs)])
        return ok([r.to_dict() for r in service.history(**kwargs)])

    @app.route("/presencas/aluno/<int:student_id>", methods=["GET"], endpoint="attendance_by_student")
    @api_errors("carregar presenças do aluno")
    def attendance_by_student(student_id: int):
        records = service.list_by_student(
            student_id=student_id,
            start=parse_date_param(request.args.get("from"), "Data inicial"),
            end=parse_date_param(request.args.get("to"), "Data final"),
        )
        return ok([r.to_dict() for r in records])

    @app.route("/presencas/aluno/<int:student_id>/export", methods=["GET"], endpoint="attendance_by_student_export")
    @api_errors("exportar presenças do aluno")
    def attendance_by_student_export(student_id: int):
        records = service.list_by_student(
            student_id=student_id,
            start=parse_date_param(request.args.get("from"), "Data inicial"),
            end=parse_date_param(request.args.get("to"), "Data final"),
        )

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["date", "shift", "status", "justification", "class_id", "created_date", "created_by"],
            extrasaction="ignore",
        )
        writer.writeheader()
        for r in records:
            writer.writerow(r.to_dict())

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=presencas_aluno_{student_id}.csv"},
        )
