# hc_core/tests/helpers.py
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group


def make_user(username, *roles, email=""):
    User = get_user_model()
    user = User.objects.create_user(username=username, password="testpass", email=email, is_active=True)
    for role in roles:
        group, _ = Group.objects.get_or_create(name=role)
        user.groups.add(group)
    return user


def rx(medicine, quantity, **repetition):
    """
    One submitted prescription row. Morning-only unless told otherwise.
    """
    return {
        "medicine_id": str(getattr(medicine, "id", medicine)),
        "medicine_name": getattr(medicine, "name", ""),
        "quantity": quantity,
        "repetition": repetition or {"morning": True},
        "instructions": "",
    }
