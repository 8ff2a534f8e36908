from django.template.loader import render_to_string

from .live import ListState, apply_snapshot, fingerprint


def list_state(snapshot, timestamp_field="created_at") -> ListState:
    return apply_snapshot(ListState(), snapshot, timestamp_field)


def state_version(state: ListState):
    """Fingerprint of the loaded records; None for a list in error."""
    return None if state.error else fingerprint(state.records)


def snapshot_payload(request, snapshot, template: str, timestamp_field="created_at", **context) -> dict:
    """JSON body for a polled list: the rendered list replaces the old one wholesale."""
    state = list_state(snapshot, timestamp_field)
    html = render_to_string(template, {"state": state, **context}, request=request)
    return {
        "version": state_version(state),
        "count": len(state.records),
        "error": state.error,
        "html": html,
    }
