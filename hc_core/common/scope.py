# hc_core/common/scope.py
from __future__ import annotations

from dataclasses import dataclass

from rest_framework.exceptions import NotAuthenticated, PermissionDenied

from hc_core.common.permissions import is_doctor

NOT_A_DOCTOR_MSG = "This action is only available to doctors."


@dataclass(frozen=True)
class DoctorScope:
    doctor_id: int
    actor_user_id: int


def require_doctor_scope(request) -> DoctorScope:
    """
    The tenant boundary is the authenticated doctor.
    Returns the scope or raises (401 if anonymous, 403 if not a doctor).
    Attaches request.doctor_id for downstream consistency.
    """
    user = getattr(request, "user", None)
    if not user or not user.is_authenticated:
        raise NotAuthenticated()

    if not is_doctor(user):
        raise PermissionDenied(NOT_A_DOCTOR_MSG)

    request.doctor_id = user.id
    return DoctorScope(doctor_id=user.id, actor_user_id=user.id)
