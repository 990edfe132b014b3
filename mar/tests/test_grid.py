from datetime import date, time

from django.test import TestCase

from mar.models import choices
from mar.service.administration import record_vitals_value, set_administration
from mar.service.grid import build_grid
from mar.tests.helpers import make_form, make_medication, make_vitals

CellState = choices.CellState


class BuildGridTests(TestCase):
    def setUp(self) -> None:
        self.form = make_form(month_year="2025-11")

    def test_rows_have_31_cells_and_follow_display_order(self):
        vitals = make_vitals(self.form, display_order=10)
        medication = make_medication(self.form, start=date(2025, 11, 1), display_order=20)

        grid = build_grid(self.form.id)

        self.assertEqual([row.line_item.pk for row in grid.rows], [vitals.pk, medication.pk])
        self.assertEqual(grid.days, list(range(1, 32)))
        for row in grid.rows:
            self.assertEqual(len(row.cells), 31)
        # 11 月没有 31 日
        self.assertFalse(grid.rows[1].cells[30].active)
        self.assertTrue(grid.rows[0].cells[30].active)

    def test_cell_codes_and_notes(self):
        medication = make_medication(self.form, start=date(2025, 11, 1))
        vitals = make_vitals(self.form)
        set_administration(medication.id, 2, choices.AdministrationStatus.GIVEN, "jd")
        set_administration(medication.id, 3, choices.AdministrationStatus.PRN, "jd")
        record_vitals_value(vitals.id, 2, "120/80")

        rows = {row.line_item.pk: row for row in build_grid(self.form.id).rows}

        med_cells = rows[medication.pk].cells
        self.assertEqual((med_cells[1].state, med_cells[1].code), (CellState.GIVEN, "JD"))
        self.assertEqual(med_cells[2].state, CellState.PRN)
        self.assertEqual(med_cells[3].state, CellState.UNSET)
        self.assertTrue(med_cells[3].editable)
        self.assertEqual(rows[vitals.pk].cells[1].code, "120/80")
        self.assertIsNone(rows[vitals.pk].origin_day)

    def test_medication_groups(self):
        start = date(2025, 11, 1)
        am = make_medication(self.form, name="Metformin", dosage="500mg", start=start, hour=time(8, 0), display_order=10)
        pm = make_medication(self.form, name="Metformin", dosage="500mg", start=start, hour=time(20, 0), display_order=11)
        other = make_medication(self.form, name="Aspirin", dosage="81mg", start=start, display_order=20)

        rows = build_grid(self.form.id).rows

        self.assertEqual([row.line_item.pk for row in rows], [am.pk, pm.pk, other.pk])
        self.assertEqual([(row.group_start, row.group_size) for row in rows], [(True, 2), (False, 0), (True, 1)])
