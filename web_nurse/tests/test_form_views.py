import json

from django.conf import settings
from django.test import Client, TestCase
from django.urls import reverse

from mar.models import MarForm
from mar.tests.helpers import make_form, make_medication, make_nurse, make_patient


class FormGridViewTests(TestCase):
    def setUp(self):
        self.client = Client()
        self.nurse = make_nurse()
        self.form = make_form(month_year="2025-10")
        self.medication = make_medication(self.form)
        self.url = reverse("web_nurse:form_grid", args=[self.form.id])

    def test_requires_login(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()["success"])

    def test_grid_payload(self):
        self.client.force_login(self.nurse)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["message_dismiss_after_ms"], settings.MAR_MESSAGE_TIMEOUT_MS)
        grid = data["grid"]
        self.assertEqual(grid["form"]["month_year"], "2025-10")
        self.assertEqual(len(grid["days"]), 31)
        row = grid["rows"][0]
        self.assertEqual(row["name"], "Lisinopril")
        self.assertEqual(row["hour"], "09:00")
        self.assertEqual(len(row["cells"]), 31)
        self.assertEqual(row["cells"][3]["state"], "inactive")
        self.assertEqual(row["cells"][4]["state"], "unset")
        self.assertTrue(row["cells"][4]["editable"])

    def test_unknown_form_is_404(self):
        self.client.force_login(self.nurse)
        response = self.client.get(reverse("web_nurse:form_grid", args=[999999]))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["dismiss_after_ms"], settings.MAR_ERROR_TIMEOUT_MS)

    def test_grid_rejects_post(self):
        self.client.force_login(self.nurse)
        self.assertEqual(self.client.post(self.url).status_code, 405)


class StartFormViewTests(TestCase):
    def setUp(self):
        self.client = Client()
        self.nurse = make_nurse()
        self.client.force_login(self.nurse)
        self.patient = make_patient(allergies="", physician_name="Dr. House")
        self.url = reverse("web_nurse:form_start")

    def test_start_then_confirm_duplicate(self):
        response = self.client.post(self.url, {"patient_id": self.patient.id, "month_year": "November 2025"})
        self.assertEqual(response.status_code, 201)
        form = response.json()["form"]
        self.assertEqual(form["month_year"], "2025-11")
        self.assertEqual(form["allergies"], "None")
        self.assertEqual(form["physician_name"], "Dr. House")

        response = self.client.post(self.url, {"patient_id": self.patient.id, "month_year": "2025-11"})
        self.assertEqual(response.status_code, 409)
        data = response.json()
        self.assertTrue(data["needs_confirmation"])
        self.assertEqual(data["existing"]["id"], form["id"])

        response = self.client.post(
            self.url,
            data=json.dumps({"patient_id": self.patient.id, "month_year": "2025-11", "confirm_duplicate": True}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(MarForm.objects.filter(patient=self.patient).count(), 2)

    def test_unknown_patient(self):
        response = self.client.post(self.url, {"patient_id": 999999})
        self.assertEqual(response.status_code, 404)

    def test_bad_month(self):
        response = self.client.post(self.url, {"patient_id": self.patient.id, "month_year": "Smarch 2025"})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(MarForm.objects.exists())


class FormHeaderViewTests(TestCase):
    def setUp(self):
        self.client = Client()
        self.client.force_login(make_nurse())
        self.form = make_form()

    def test_comments(self):
        response = self.client.post(
            reverse("web_nurse:form_comments", args=[self.form.id]),
            {"comments": "  Family visiting Sunday  "},
        )
        self.assertEqual(response.status_code, 200)
        self.form.refresh_from_db()
        self.assertEqual(self.form.comments, "Family visiting Sunday")

    def test_header_update_and_unknown_field(self):
        url = reverse("web_nurse:form_header", args=[self.form.id])
        response = self.client.post(url, {"diet": "Low sodium", "date_of_birth": "1950-02-03"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["form"]["date_of_birth"], "1950-02-03")

        response = self.client.post(url, {"month_year": "2025-12"})
        self.assertEqual(response.status_code, 400)
        self.form.refresh_from_db()
        self.assertEqual(self.form.month_year, "2025-10")
