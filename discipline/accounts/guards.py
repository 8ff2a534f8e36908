import logging
from functools import wraps

from django.db import DatabaseError
from django.shortcuts import redirect

from .models import Profile

logger = logging.getLogger(__name__)

ALL_ROLES = tuple(code for code, _ in Profile.ROLE_CHOICES)


def get_profile(user):
    """Profile of ``user``; None when absent or when the lookup fails."""
    if not user.is_authenticated:
        return None
    try:
        return Profile.objects.filter(user_id=user.pk).first()
    except DatabaseError:
        logger.exception("Profile lookup failed for user %s", user.pk)
        return None


def role_required(*roles, redirect_to="accounts:login"):
    """
    Only let callers whose profile role is in ``roles`` reach the view.

    Anonymous callers go to the sign-in page. A missing profile, a failed
    lookup or a role outside ``roles`` redirect to ``redirect_to``. The profile
    is attached to the request as ``request.profile``.
    """
    allowed = set(roles or ALL_ROLES)

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect("accounts:login")
            profile = get_profile(request.user)
            if profile is None or profile.role not in allowed:
                logger.info(
                    "Denied %s to user %s (role=%s)",
                    view_func.__name__, request.user.pk, getattr(profile, "role", None),
                )
                return redirect(redirect_to)
            request.profile = profile
            return view_func(request, *args, **kwargs)

        return _wrapped

    return decorator
