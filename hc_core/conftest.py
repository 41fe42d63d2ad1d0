# hc_core/conftest.py
import pytest
from django.utils.timezone import now
from rest_framework.test import APIClient

from hc_core.appointments.services import AppointmentService
from hc_core.common.permissions import ROLE_DOCTOR, ROLE_PATIENT
from hc_core.medicines.models import Medicine
from hc_core.patients.models import Patient
from hc_core.tests.helpers import make_user


@pytest.fixture
def doctor(db):
    return make_user("dr-one", ROLE_DOCTOR)


@pytest.fixture
def other_doctor(db):
    return make_user("dr-two", ROLE_DOCTOR)


@pytest.fixture
def patient_user(db):
    return make_user("pat-login", ROLE_PATIENT, email="pat@example.com")


@pytest.fixture
def api_client(doctor):
    c = APIClient()
    c.force_authenticate(user=doctor)
    return c


@pytest.fixture
def other_client(other_doctor):
    c = APIClient()
    c.force_authenticate(user=other_doctor)
    return c


@pytest.fixture
def patient(doctor):
    return Patient.objects.create(doctor_id=doctor.id, name="Test Patient", age=34, sex="female")


@pytest.fixture
def other_patient(other_doctor):
    return Patient.objects.create(doctor_id=other_doctor.id, name="Someone Else", age=50, sex="male")


@pytest.fixture
def arnica(doctor):
    return Medicine.objects.create(doctor_id=doctor.id, name="Arnica 30C", stock=8)


@pytest.fixture
def belladonna(doctor):
    return Medicine.objects.create(doctor_id=doctor.id, name="Belladonna 200C", stock=20)


@pytest.fixture
def foreign_medicine(other_doctor):
    return Medicine.objects.create(doctor_id=other_doctor.id, name="Nux Vomica", stock=10)


@pytest.fixture
def appointment(doctor, patient):
    """
    A fresh scheduled appointment, created through the service like the API does.
    """
    return AppointmentService.schedule(
        doctor_id=doctor.id,
        actor_user_id=doctor.id,
        patient_id=patient.id,
        appointment_at=now(),
        patient_remarks="Bruising after a fall",
    )
