"""测试用的数据构造函数。"""

from datetime import date, time

from django.contrib.auth import get_user_model

from mar.models import LineItem, MarForm, choices
from users.models import Patient

User = get_user_model()


def make_nurse(username="nurse_jd", full_name="Jane Doe", staff_initials="", **extra):
    return User.objects.create_user(
        username=username,
        password="password",
        full_name=full_name,
        staff_initials=staff_initials,
        **extra,
    )


def make_patient(name="John Smith", **extra):
    extra.setdefault("record_number", "MRN-001")
    return Patient.objects.create(name=name, **extra)


def make_form(patient=None, month_year="2025-10", **extra):
    patient = patient or make_patient()
    return MarForm.objects.create(
        patient=patient,
        month_year=month_year,
        patient_name=patient.name,
        **extra,
    )


def make_medication(form, name="Lisinopril", dosage="10mg", start=date(2025, 10, 5), stop=None, **extra):
    extra.setdefault("hour", time(9, 0))
    return LineItem.objects.create(
        form=form,
        kind=choices.LineItemKind.MEDICATION,
        name=name,
        dosage=dosage,
        start_date=start,
        stop_date=stop,
        **extra,
    )


def make_vitals(form, instructions="BP and pulse daily", start=date(2025, 10, 1), **extra):
    return LineItem.objects.create(
        form=form,
        kind=choices.LineItemKind.VITALS,
        name="Vital Signs",
        dosage=instructions,
        start_date=start,
        **extra,
    )
