import logging

from django.contrib import messages

logger = logging.getLogger(__name__)


def run_mutation(request, operation, success: str, failure: str):
    """
    Run a single write against the store and flash the outcome.

    Any error is logged and replaced by the generic ``failure`` message;
    nothing is retried. Returns the operation's result, or None on failure.
    """
    try:
        result = operation()
    except Exception:
        logger.exception("Mutation failed: %s", failure)
        messages.error(request, failure)
        return None
    messages.success(request, success)
    return result if result is not None else True
