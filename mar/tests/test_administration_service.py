"""Administration state machine transitions."""

from django.core.exceptions import ValidationError
from django.test import TestCase

from mar.models import AdministrationMark, choices
from mar.service.administration import (
    cell_state,
    demote_administration,
    record_vitals_value,
    set_administration,
    update_administration_note,
)
from mar.tests.helpers import make_form, make_medication, make_nurse, make_vitals

Status = choices.AdministrationStatus


class SetAdministrationTests(TestCase):
    def setUp(self) -> None:
        self.nurse = make_nurse(full_name="Jane Doe")
        self.form = make_form()
        self.medication = make_medication(self.form)

    def test_given_creates_mark_with_upper_case_initials_and_timestamp(self):
        result = set_administration(self.medication.id, 6, Status.GIVEN, " jd ")

        self.assertTrue(result.saved)
        mark = AdministrationMark.objects.get(line_item=self.medication, day=6)
        self.assertEqual(mark.status, Status.GIVEN)
        self.assertEqual(mark.initials, "JD")
        self.assertIsNotNone(mark.administered_at)
        self.assertEqual(set(result.marks), {6})

    def test_given_without_initials_uses_clinician_default(self):
        set_administration(self.medication.id, 7, Status.GIVEN, "", clinician=self.nurse)
        self.assertEqual(AdministrationMark.objects.get(line_item=self.medication, day=7).initials, "JD")

    def test_not_given_without_existing_mark_is_a_no_op(self):
        result = set_administration(self.medication.id, 8, Status.NOT_GIVEN, "JD")

        self.assertFalse(result.saved)
        self.assertFalse(AdministrationMark.objects.exists())

    def test_not_given_keeps_previous_initials(self):
        set_administration(self.medication.id, 9, Status.GIVEN, "AB")
        result = set_administration(self.medication.id, 9, Status.NOT_GIVEN)

        mark = AdministrationMark.objects.get(line_item=self.medication, day=9)
        self.assertTrue(result.saved)
        self.assertEqual(mark.status, Status.NOT_GIVEN)
        self.assertEqual(mark.initials, "AB")
        self.assertIsNone(mark.administered_at)

    def test_not_given_with_replacement_initials(self):
        set_administration(self.medication.id, 9, Status.GIVEN, "AB")
        set_administration(self.medication.id, 9, Status.NOT_GIVEN, "cd")
        self.assertEqual(AdministrationMark.objects.get(line_item=self.medication, day=9).initials, "CD")

    def test_prn_status_is_stored(self):
        set_administration(self.medication.id, 10, Status.PRN, "jd")
        mark = AdministrationMark.objects.get(line_item=self.medication, day=10)
        self.assertEqual(mark.status, Status.PRN)
        self.assertIsNone(mark.administered_at)

    def test_inactive_day_is_rejected_before_write(self):
        with self.assertRaisesMessage(ValidationError, "Medication not active on this day."):
            set_administration(self.medication.id, 4, Status.GIVEN, "JD")
        self.assertFalse(AdministrationMark.objects.exists())

    def test_day_out_of_range_and_unknown_status_are_rejected(self):
        with self.assertRaises(ValidationError):
            set_administration(self.medication.id, 32, Status.GIVEN, "JD")
        with self.assertRaises(ValidationError):
            set_administration(self.medication.id, 6, "Maybe", "JD")

    def test_unknown_line_item(self):
        with self.assertRaisesMessage(ValidationError, "Line item not found."):
            set_administration(999999, 6, Status.GIVEN, "JD")

    def test_discontinued_days_are_rejected(self):
        set_administration(self.medication.id, 10, Status.GIVEN, "DC")
        with self.assertRaisesMessage(ValidationError, "discontinued on day 10"):
            set_administration(self.medication.id, 12, Status.GIVEN, "JD")
        self.assertEqual(AdministrationMark.objects.get(line_item=self.medication, day=12).initials, "DC")


class DemoteAdministrationTests(TestCase):
    def setUp(self) -> None:
        self.form = make_form()
        self.medication = make_medication(self.form)

    def test_demote_given_preserves_initials(self):
        set_administration(self.medication.id, 6, Status.GIVEN, "JD")
        result = demote_administration(self.medication.id, 6)

        mark = AdministrationMark.objects.get(line_item=self.medication, day=6)
        self.assertTrue(result.saved)
        self.assertEqual(mark.status, Status.NOT_GIVEN)
        self.assertEqual(mark.initials, "JD")

    def test_demote_unset_cell_is_a_no_op(self):
        result = demote_administration(self.medication.id, 6)
        self.assertFalse(result.saved)
        self.assertFalse(AdministrationMark.objects.exists())

    def test_demote_vitals_is_a_no_op(self):
        vitals = make_vitals(self.form)
        record_vitals_value(vitals.id, 3, "120/80")
        result = demote_administration(vitals.id, 3)

        self.assertFalse(result.saved)
        self.assertEqual(AdministrationMark.objects.get(line_item=vitals, day=3).status, Status.GIVEN)


class VitalsValueTests(TestCase):
    def setUp(self) -> None:
        self.form = make_form()
        self.vitals = make_vitals(self.form)

    def test_value_is_stored_verbatim(self):
        record_vitals_value(self.vitals.id, 1, " bp 120/80 ok ")
        mark = AdministrationMark.objects.get(line_item=self.vitals, day=1)
        self.assertEqual(mark.initials, "bp 120/80 ok")
        self.assertEqual(mark.status, Status.GIVEN)

    def test_empty_value_is_a_no_op(self):
        result = record_vitals_value(self.vitals.id, 1, "   ")
        self.assertFalse(result.saved)
        self.assertFalse(AdministrationMark.objects.exists())

    def test_dc_on_vitals_does_not_cascade(self):
        record_vitals_value(self.vitals.id, 2, "DC")
        self.assertEqual(AdministrationMark.objects.filter(line_item=self.vitals).count(), 1)
        record_vitals_value(self.vitals.id, 3, "98.6")

    def test_medication_rows_rejected(self):
        medication = make_medication(self.form)
        with self.assertRaises(ValidationError):
            record_vitals_value(medication.id, 6, "120/80")


class AdministrationNoteTests(TestCase):
    def setUp(self) -> None:
        self.form = make_form()
        self.medication = make_medication(self.form)

    def test_note_on_existing_mark(self):
        set_administration(self.medication.id, 6, Status.GIVEN, "JD")
        update_administration_note(self.medication.id, 6, "  patient refused water ")
        self.assertEqual(
            AdministrationMark.objects.get(line_item=self.medication, day=6).notes,
            "patient refused water",
        )
        update_administration_note(self.medication.id, 6, "")
        self.assertEqual(AdministrationMark.objects.get(line_item=self.medication, day=6).notes, "")

    def test_note_without_mark_is_rejected(self):
        with self.assertRaises(ValidationError):
            update_administration_note(self.medication.id, 6, "note")
        self.assertFalse(AdministrationMark.objects.exists())

    def test_notes_survive_not_given(self):
        set_administration(self.medication.id, 6, Status.GIVEN, "JD")
        update_administration_note(self.medication.id, 6, "late dose")
        set_administration(self.medication.id, 6, Status.NOT_GIVEN)
        self.assertEqual(AdministrationMark.objects.get(line_item=self.medication, day=6).notes, "late dose")


class CellStateTests(TestCase):
    def test_state_precedence(self):
        mark = AdministrationMark(day=3, status=Status.NOT_GIVEN, initials="JD")
        self.assertEqual(cell_state(mark, False, None), choices.CellState.INACTIVE)
        self.assertEqual(cell_state(mark, True, 2), choices.CellState.DISCONTINUED)
        self.assertEqual(cell_state(None, True, None), choices.CellState.UNSET)
        self.assertEqual(cell_state(mark, True, None), choices.CellState.NOT_GIVEN)
        mark.status = Status.PRN
        self.assertEqual(cell_state(mark, True, None), choices.CellState.PRN)
        mark.status = Status.GIVEN
        self.assertEqual(cell_state(mark, True, None), choices.CellState.GIVEN)
