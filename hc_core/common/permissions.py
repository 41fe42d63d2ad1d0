# hc_core/common/permissions.py

from __future__ import annotations

from typing import Set

from rest_framework.permissions import BasePermission, SAFE_METHODS

# Group/role names (Django auth Group names)
ROLE_ADMIN = "ADMIN"
ROLE_DOCTOR = "DOCTOR"
ROLE_PATIENT = "PATIENT"


def user_roles(user) -> Set[str]:
    """
    Resolve roles from:
    1) Django groups: user.groups (recommended)
    2) Optional user.role attribute (if a custom user model has it)

    Returns set of role strings.
    """
    roles: Set[str] = set()

    if not user or not getattr(user, "is_authenticated", False):
        return roles

    # Superuser treated as admin
    if getattr(user, "is_superuser", False):
        roles.add(ROLE_ADMIN)
        return roles

    if hasattr(user, "groups"):
        roles.update(user.groups.values_list("name", flat=True))

    if hasattr(user, "role") and user.role:
        roles.add(str(user.role).upper())

    return roles


def is_doctor(user) -> bool:
    roles = user_roles(user)
    return ROLE_DOCTOR in roles or ROLE_ADMIN in roles


class DoctorPermission(BasePermission):
    """
    Doctor-owned resources (patients, medicines, appointments, alerts).

    - DOCTOR / ADMIN: full access to their own tenant rows.
    - PATIENT: no access here (patient-facing reads use PatientReadPermission).
    Object-level tenant checks are done by the scoped selectors, not here.
    """

    message = "Only doctors can perform this action."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return is_doctor(user)


class PatientReadPermission(BasePermission):
    """
    Read-only access for a patient to their own records.
    """

    message = "Only patients can view this resource."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if request.method not in SAFE_METHODS:
            return False
        return ROLE_PATIENT in user_roles(user)
