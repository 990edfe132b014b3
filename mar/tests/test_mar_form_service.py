"""Form lifecycle: start, header edits and full-state reload."""

from datetime import date

from django.core.exceptions import ValidationError
from django.test import TestCase

from mar.models import MarForm, choices
from mar.service.administration import set_administration
from mar.service.mar_form import (
    list_forms,
    load_form_state,
    start_form,
    update_comments,
    update_form_header,
)
from mar.service.prn import add_prn_record
from mar.tests.helpers import make_medication, make_nurse, make_patient, make_vitals


class StartFormTests(TestCase):
    def setUp(self) -> None:
        self.nurse = make_nurse()
        self.patient = make_patient(
            name="Mary Major",
            date_of_birth=date(1950, 4, 2),
            sex="Female",
            diagnosis="CHF",
            facility_name="Sunrise Home",
        )

    def test_snapshot_copied_with_defaults(self):
        result = start_form(self.patient.id, "October 2025", created_by=self.nurse)

        form = result.form
        self.assertTrue(result.created)
        self.assertEqual(form.month_year, "2025-10")
        self.assertEqual(form.patient_name, "Mary Major")
        self.assertEqual(form.diagnosis, "CHF")
        self.assertEqual(form.allergies, "None")
        self.assertEqual(form.physician_name, "TBD")
        self.assertEqual(form.facility_name, "Sunrise Home")
        self.assertEqual(form.status, choices.FormStatus.DRAFT)
        self.assertEqual(form.created_by, self.nurse)

    def test_duplicate_month_needs_confirmation(self):
        first = start_form(self.patient.id, "2025-10").form

        result = start_form(self.patient.id, "10/2025")

        self.assertTrue(result.needs_confirmation)
        self.assertEqual(result.existing, first)
        self.assertEqual(MarForm.objects.count(), 1)

        confirmed = start_form(self.patient.id, "2025-10", confirm_duplicate=True)
        self.assertTrue(confirmed.created)
        self.assertEqual(MarForm.objects.count(), 2)
        self.assertEqual(list(list_forms(self.patient.id, "2025-10")), [confirmed.form, first])

    def test_unknown_patient_and_month(self):
        with self.assertRaises(ValidationError):
            start_form(999999, "2025-10")
        with self.assertRaises(ValidationError):
            start_form(self.patient.id, "Octember")


class FormEditsTests(TestCase):
    def setUp(self) -> None:
        self.form = start_form(make_patient().id, "2025-10").form

    def test_comments(self):
        update_comments(self.form.id, "  family visited  ")
        self.form.refresh_from_db()
        self.assertEqual(self.form.comments, "family visited")

    def test_header_fields(self):
        update_form_header(self.form.id, allergies="Penicillin", date_of_birth="1944-01-09")
        self.form.refresh_from_db()
        self.assertEqual(self.form.allergies, "Penicillin")
        self.assertEqual(self.form.date_of_birth, date(1944, 1, 9))

        with self.assertRaises(ValidationError):
            update_form_header(self.form.id, month_year="2025-11")


class LoadFormStateTests(TestCase):
    def test_state_contains_every_collection(self):
        form = start_form(make_patient().id, "2025-10").form
        medication = make_medication(form, display_order=20)
        vitals = make_vitals(form, display_order=10)
        set_administration(medication.id, 6, choices.AdministrationStatus.GIVEN, "JD")
        add_prn_record(
            form.id, "2025-10-02", "Tylenol", "Pain",
            hour="08:00", result="Better", initials="JD", staff_signature="Jane Doe",
        )

        state = load_form_state(form.id)

        self.assertEqual([item.pk for item in state.line_items], [vitals.pk, medication.pk])
        self.assertEqual(list(state.marks[medication.pk]), [6])
        self.assertEqual(state.marks[vitals.pk], {})
        self.assertEqual(len(state.prn_records), 1)
        self.assertEqual(state.signature_legend, {"JD": "Jane Doe"})
