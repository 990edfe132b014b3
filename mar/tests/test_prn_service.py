from datetime import date, time

import pytest
from django.core.exceptions import ValidationError

from mar.models import PRNRecord
from mar.service.prn import (
    add_prn_record,
    build_signature_legend,
    delete_prn_record,
    update_prn_field,
    validate_prn_field_edit,
)
from mar.tests.helpers import make_form


@pytest.mark.django_db
class TestPRNFieldOrder:
    def setup_method(self):
        self.form = make_form()
        self.record = add_prn_record(self.form.id, "2025-10-03", "Tylenol 500mg", "Headache")

    def test_initials_require_time_and_result(self):
        with pytest.raises(ValidationError) as exc:
            update_prn_field(self.record.id, "initials", "jd")
        assert "Time and Result must be filled before setting Initials" in str(exc.value)

        update_prn_field(self.record.id, "hour", "14:30")
        with pytest.raises(ValidationError) as exc:
            update_prn_field(self.record.id, "initials", "jd")
        assert "Result must be filled before setting Initials" in str(exc.value)

        update_prn_field(self.record.id, "result", "Relieved")
        record = update_prn_field(self.record.id, "initials", "jd")
        assert record.initials == "JD"
        assert record.hour == time(14, 30)

    def test_signature_requires_initials(self):
        with pytest.raises(ValidationError) as exc:
            update_prn_field(self.record.id, "staff_signature", "Jane Doe")
        assert "Initials must be filled before setting Staff Signature" in str(exc.value)

    def test_blank_values_are_stored_as_null(self):
        update_prn_field(self.record.id, "result", "Relieved")
        record = update_prn_field(self.record.id, "result", "   ")
        assert record.result is None
        record.refresh_from_db()
        assert record.result is None

    def test_clearing_initials_is_not_gated(self):
        update_prn_field(self.record.id, "hour", "14:30")
        update_prn_field(self.record.id, "result", "Relieved")
        update_prn_field(self.record.id, "initials", "JD")
        update_prn_field(self.record.id, "hour", "")
        record = update_prn_field(self.record.id, "initials", "")
        assert record.initials is None

    def test_reason_cannot_be_cleared(self):
        with pytest.raises(ValidationError):
            update_prn_field(self.record.id, "reason", "")

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            update_prn_field(self.record.id, "medication", "Advil")

    def test_validate_accepts_record_or_mapping(self):
        validate_prn_field_edit({"hour": time(8, 0), "result": "ok"}, "initials")
        with pytest.raises(ValidationError):
            validate_prn_field_edit(PRNRecord(hour=time(8, 0)), "initials")


@pytest.mark.django_db
class TestPRNSignatureLegend:
    def setup_method(self):
        self.form = make_form()

    def test_initials_auto_fill_signature(self):
        add_prn_record(
            self.form.id,
            date(2025, 10, 1),
            "Tylenol",
            "Pain",
            hour="08:00",
            result="Better",
            initials="jd",
            staff_signature="Jane Doe, RN",
        )
        record = add_prn_record(self.form.id, date(2025, 10, 2), "Tylenol", "Pain", hour="09:00", result="Better")

        updated = update_prn_field(record.id, "initials", "jd")

        assert updated.staff_signature == "Jane Doe, RN"
        assert PRNRecord.objects.get(pk=record.id).staff_signature == "Jane Doe, RN"

    def test_new_record_signature_from_legend(self):
        add_prn_record(
            self.form.id, "2025-10-01", "Tylenol", "Pain",
            hour="08:00", result="Better", initials="AB", staff_signature="A. Brown",
        )
        record = add_prn_record(
            self.form.id, "2025-10-02", "Advil", "Fever", hour="10:00", result="Afebrile", initials="ab"
        )
        assert record.staff_signature == "A. Brown"

    def test_creation_respects_field_order(self):
        with pytest.raises(ValidationError):
            add_prn_record(self.form.id, "2025-10-02", "Advil", "Fever", initials="AB")
        with pytest.raises(ValidationError):
            add_prn_record(self.form.id, "2025-10-02", "Advil", "")
        assert PRNRecord.objects.count() == 0

    def test_later_entries_win(self):
        records = [
            PRNRecord(initials="jd", staff_signature="Old"),
            PRNRecord(initials="JD", staff_signature="New"),
            PRNRecord(initials="XY", staff_signature=None),
        ]
        assert build_signature_legend(records) == {"JD": "New"}


@pytest.mark.django_db
def test_entry_number_is_count_plus_one_and_not_renumbered():
    form = make_form()
    first = add_prn_record(form.id, "2025-10-01", "Tylenol", "Pain")
    second = add_prn_record(form.id, "2025-10-02", "Tylenol", "Pain")
    assert (first.entry_number, second.entry_number) == (1, 2)

    delete_prn_record(first.id)
    third = add_prn_record(form.id, "2025-10-03", "Tylenol", "Pain")

    assert PRNRecord.objects.get(pk=second.id).entry_number == 2
    assert third.entry_number == 2
