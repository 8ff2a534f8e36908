from django.conf import settings


def school(request):
    return {
        "school_name": settings.SCHOOL_NAME,
        "message_dismiss_ms": settings.MESSAGE_DISMISS_SECONDS * 1000,
        "live_poll_ms": settings.LIVE_POLL_SECONDS * 1000,
    }
