"""MAR 模型与网格视图模型的 JSON 序列化。"""

from typing import Dict, Optional

from mar.models import AdministrationMark, LineItem, MarForm, PRNRecord, VitalSignsReading
from mar.service.grid import Grid, GridCell, GridRow


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _hour(value) -> Optional[str]:
    return value.strftime("%H:%M") if value is not None else None


def serialize_form(form: MarForm) -> Dict:
    return {
        "id": form.pk,
        "patient_id": form.patient_id,
        "month_year": form.month_year,
        "status": form.status,
        "patient_name": form.patient_name,
        "record_number": form.record_number,
        "date_of_birth": _iso(form.date_of_birth),
        "sex": form.sex,
        "diagnosis": form.diagnosis,
        "diet": form.diet,
        "allergies": form.allergies,
        "physician_name": form.physician_name,
        "physician_phone": form.physician_phone,
        "facility_name": form.facility_name,
        "vital_signs_instructions": form.vital_signs_instructions,
        "comments": form.comments,
        "created_at": _iso(form.created_at),
    }


def serialize_line_item(item: LineItem) -> Dict:
    return {
        "id": item.pk,
        "kind": item.kind,
        "name": item.name,
        "dosage": item.dosage,
        "route": item.route,
        "start_date": _iso(item.start_date),
        "stop_date": _iso(item.stop_date),
        "hour": _hour(item.hour),
        "notes": item.notes,
        "parameter": item.parameter,
        "display_order": item.display_order,
        "frequency": item.frequency,
        "frequency_label": item.frequency_label,
    }


def serialize_mark(mark: Optional[AdministrationMark]) -> Optional[Dict]:
    if mark is None:
        return None
    return {
        "day": mark.day,
        "status": mark.status,
        "initials": mark.initials,
        "notes": mark.notes,
        "administered_at": _iso(mark.administered_at),
    }


def serialize_marks(marks: Dict[int, AdministrationMark]) -> Dict[str, Dict]:
    return {str(day): serialize_mark(mark) for day, mark in sorted(marks.items())}


def serialize_cell(cell: GridCell) -> Dict:
    return {
        "day": cell.day,
        "active": cell.active,
        "state": cell.state,
        "code": cell.code,
        "note": cell.note,
        "editable": cell.editable,
        "is_origin": cell.is_origin,
    }


def serialize_row(row: GridRow) -> Dict:
    data = serialize_line_item(row.line_item)
    data.update(
        {
            "origin_day": row.origin_day,
            "group_start": row.group_start,
            "group_size": row.group_size,
            "cells": [serialize_cell(cell) for cell in row.cells],
        }
    )
    return data


def serialize_prn(record: PRNRecord) -> Dict:
    return {
        "id": record.pk,
        "entry_number": record.entry_number,
        "date": _iso(record.date),
        "hour": _hour(record.hour),
        "medication": record.medication,
        "reason": record.reason,
        "result": record.result,
        "initials": record.initials,
        "staff_signature": record.staff_signature,
        "note": record.note,
    }


def serialize_vital_reading(reading: Optional[VitalSignsReading]) -> Optional[Dict]:
    if reading is None:
        return None
    return {
        "day": reading.day,
        "temperature": str(reading.temperature) if reading.temperature is not None else None,
        "pulse": reading.pulse,
        "respiration": reading.respiration,
        "weight": str(reading.weight) if reading.weight is not None else None,
        "systolic_bp": reading.systolic_bp,
        "diastolic_bp": reading.diastolic_bp,
        "bowel_movement": reading.bowel_movement,
    }


def serialize_grid(grid: Grid) -> Dict:
    state = grid.state
    return {
        "form": serialize_form(grid.form),
        "days": grid.days,
        "rows": [serialize_row(row) for row in grid.rows],
        "prn_records": [serialize_prn(record) for record in state.prn_records],
        "vital_signs": {
            str(day): serialize_vital_reading(reading) for day, reading in sorted(state.vital_signs.items())
        },
        "signature_legend": state.signature_legend,
    }
