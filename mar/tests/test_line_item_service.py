"""Adding, editing and deleting line items."""

from datetime import time

from django.core.exceptions import ValidationError
from django.test import TestCase

from mar.models import AdministrationMark, LineItem, choices
from mar.service.line_item import (
    add_medication,
    add_vitals,
    delete_line_item,
    update_hour,
    update_parameter,
)
from mar.service.administration import set_administration
from mar.service.display_order import form_line_items
from mar.tests.helpers import make_form, make_medication, make_vitals


class AddMedicationTests(TestCase):
    def setUp(self) -> None:
        self.form = make_form(month_year="2025-10")

    def test_frequency_creates_one_row_per_dose(self):
        result = add_medication(
            self.form.id,
            name="Metformin",
            dosage="500mg",
            start_date="2025-10-03",
            times=["08:00", "20:00"],
            frequency=2,
            route="PO",
        )

        self.assertEqual(len(result.items), 2)
        self.assertEqual([item.hour for item in result.items], [time(8, 0), time(20, 0)])
        self.assertEqual([item.display_order for item in result.items], [10, 11])
        self.assertEqual(result.items[0].frequency_label, "2 times per day")
        self.assertIn("2 times per day", result.message)
        self.assertFalse(AdministrationMark.objects.exists())

    def test_new_medication_goes_to_bottom(self):
        make_medication(self.form, name="A", display_order=10)
        make_medication(self.form, name="B", display_order=40)
        result = add_medication(self.form.id, "C", "5mg", "2025-10-01", hour="09:00")
        self.assertEqual(result.items[0].display_order, 50)

    def test_insert_above_target(self):
        make_medication(self.form, name="A", display_order=10)
        target = make_medication(self.form, name="B", display_order=20)
        result = add_medication(
            self.form.id, "C", "5mg", "2025-10-01", hour="09:00", target_id=target.id, position="above"
        )
        self.assertEqual(result.items[0].display_order, 15)

    def test_insert_above_first_row_with_negative_key(self):
        med = make_medication(self.form, name="A", display_order=10)
        bp = make_vitals(self.form, instructions="BP", display_order=0)
        temp = make_vitals(self.form, instructions="Temp", display_order=-10)

        result = add_medication(
            self.form.id, "C", "5mg", "2025-10-01", hour="09:00", target_id=temp.id, position="above"
        )

        self.assertLess(result.items[0].display_order, -10)
        self.assertEqual(
            [item.pk for item in form_line_items(self.form.id)],
            [result.items[0].pk, temp.pk, bp.pk, med.pk],
        )

    def test_dose_rows_wider_than_gap_renumber_the_form(self):
        first = make_medication(self.form, name="A", display_order=10)
        target = make_medication(self.form, name="B", display_order=20)

        result = add_medication(
            self.form.id,
            "Insulin",
            "5u",
            "2025-10-01",
            times=[f"{hour:02d}:00" for hour in range(12)],
            frequency=12,
            target_id=target.id,
            position="above",
        )

        new_ids = [item.pk for item in result.items]
        ordered = form_line_items(self.form.id)
        self.assertEqual([item.pk for item in ordered], [first.pk] + new_ids + [target.pk])
        self.assertEqual([item.display_order for item in ordered], list(range(10, 150, 10)))
        self.assertEqual([item.display_order for item in result.items], list(range(20, 140, 10)))
        self.assertEqual([item.hour for item in result.items], [time(hour, 0) for hour in range(12)])

    def test_single_row_without_gap_renumbers_the_form(self):
        first = make_medication(self.form, name="A", display_order=10)
        target = make_medication(self.form, name="B", display_order=11)

        result = add_medication(
            self.form.id, "C", "5mg", "2025-10-01", hour="09:00", target_id=target.id, position="above"
        )

        ordered = form_line_items(self.form.id)
        self.assertEqual([item.pk for item in ordered], [first.pk, result.items[0].pk, target.pk])
        self.assertEqual([item.display_order for item in ordered], [10, 20, 30])

    def test_start_day_mark_when_initials_supplied(self):
        result = add_medication(
            self.form.id, "Lasix", "20mg", "2025-10-07", times=["08:00", "16:00"], frequency=2, initials="jd"
        )
        marks = AdministrationMark.objects.filter(line_item__in=result.items)
        self.assertEqual(marks.count(), 2)
        self.assertEqual(set(marks.values_list("day", "initials")), {(7, "JD")})

    def test_start_in_other_month_skips_start_mark(self):
        add_medication(self.form.id, "Lasix", "20mg", "2025-09-28", hour="08:00", initials="JD")
        self.assertFalse(AdministrationMark.objects.exists())

    def test_validation(self):
        with self.assertRaises(ValidationError):
            add_medication(self.form.id, "", "20mg", "2025-10-01", hour="08:00")
        with self.assertRaises(ValidationError):
            add_medication(self.form.id, "Lasix", "20mg", "2025-10-05", stop_date="2025-10-01", hour="08:00")
        with self.assertRaisesMessage(ValidationError, "Please enter all administration times."):
            add_medication(self.form.id, "Lasix", "20mg", "2025-10-01", times=["08:00"], frequency=2)
        with self.assertRaisesMessage(ValidationError, "Please enter administration time."):
            add_medication(self.form.id, "Lasix", "20mg", "2025-10-01")
        self.assertFalse(LineItem.objects.exists())


class AddVitalsTests(TestCase):
    def setUp(self) -> None:
        self.form = make_form(month_year="2025-10")

    def test_vitals_row_is_tagged_and_first_on_empty_form(self):
        result = add_vitals(self.form.id, "BP/P daily", "2025-10-01")
        item = result.items[0]
        self.assertEqual(item.kind, choices.LineItemKind.VITALS)
        self.assertIsNone(item.hour)
        self.assertEqual(item.display_order, 10)
        self.assertEqual(item.group_key, f"vitals_{item.pk}")

    def test_start_value_is_kept_verbatim(self):
        result = add_vitals(self.form.id, "BP/P daily", "2025-10-02", initials="118/76 p72")
        mark = AdministrationMark.objects.get(line_item=result.items[0])
        self.assertEqual((mark.day, mark.initials), (2, "118/76 p72"))

    def test_instructions_required(self):
        with self.assertRaises(ValidationError):
            add_vitals(self.form.id, "  ", "2025-10-01")


class EditLineItemTests(TestCase):
    def setUp(self) -> None:
        self.form = make_form()
        self.medication = make_medication(self.form)

    def test_update_hour_and_parameter(self):
        update_hour(self.medication.id, "7:30 PM")
        update_parameter(self.medication.id, " Hold if SBP < 100 ")
        self.medication.refresh_from_db()
        self.assertEqual(self.medication.hour, time(19, 30))
        self.assertEqual(self.medication.parameter, "Hold if SBP < 100")

    def test_delete_removes_marks(self):
        set_administration(self.medication.id, 6, choices.AdministrationStatus.GIVEN, "JD")
        set_administration(self.medication.id, 7, choices.AdministrationStatus.GIVEN, "JD")

        deleted = delete_line_item(self.medication.id)

        self.assertEqual(deleted, 2)
        self.assertFalse(LineItem.objects.filter(pk=self.medication.id).exists())
        self.assertFalse(AdministrationMark.objects.exists())
