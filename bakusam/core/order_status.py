"""Order lifecycle rules shared by the API and the dashboard.

An order moves forward along one line and may be cancelled from any
non-terminal state::

    pending -> assigned -> pickup -> delivery -> completed
       \\__________\\__________\\__________\\____> cancelled

There are no rollback transitions.
"""

PENDING = "pending"
ASSIGNED = "assigned"
PICKUP = "pickup"
DELIVERY = "delivery"
COMPLETED = "completed"
CANCELLED = "cancelled"

ALL_STATUSES = (PENDING, ASSIGNED, PICKUP, DELIVERY, COMPLETED, CANCELLED)
TERMINAL_STATUSES = frozenset({COMPLETED, CANCELLED})
IN_PROGRESS_STATUSES = frozenset({PENDING, ASSIGNED, PICKUP, DELIVERY})

FORWARD = {
    PENDING: ASSIGNED,
    ASSIGNED: PICKUP,
    PICKUP: DELIVERY,
    DELIVERY: COMPLETED,
}


def next_statuses(status: str) -> list:
    """Statuses an order in ``status`` may move to, forward step first."""
    if status in TERMINAL_STATUSES or status not in FORWARD:
        return []
    return [FORWARD[status], CANCELLED]


def is_legal_transition(current: str, target: str) -> bool:
    return target in next_statuses(current)


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES
