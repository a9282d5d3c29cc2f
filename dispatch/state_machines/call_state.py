from dataclasses import replace
from datetime import datetime
from typing import Optional

from hospitals.models import CallStatus, EmergencyCall

TERMINAL_STATUSES = (CallStatus.COMPLETED, CallStatus.CANCELLED)

ALLOWED_TRANSITIONS = {
    CallStatus.ACTIVE: (CallStatus.ACTIVE, CallStatus.DISPATCHED, CallStatus.CANCELLED),
    CallStatus.DISPATCHED: (CallStatus.DISPATCHED, CallStatus.COMPLETED, CallStatus.CANCELLED),
    CallStatus.COMPLETED: (),
    CallStatus.CANCELLED: (),
}


class CallStateException(Exception):
    """Raised when an invalid emergency call transition is attempted."""
    pass


def transition_call(call: EmergencyCall, new_status: CallStatus, now: Optional[datetime] = None) -> EmergencyCall:
    """
    Move a call to new_status if the lifecycle allows it.
    active -> dispatched -> completed, any non-terminal state -> cancelled.
    """
    new_status = CallStatus(new_status)
    if new_status not in ALLOWED_TRANSITIONS[call.status]:
        raise CallStateException(f"Cannot move emergency call {call.id} from {call.status.value} to {new_status.value}")

    return replace(call, status=new_status, updated_at=now or datetime.now())


def mark_call_dispatched(
    call: EmergencyCall,
    hospital_id: str,
    estimated_time: Optional[int] = None,
    distance: Optional[float] = None,
    now: Optional[datetime] = None,
) -> EmergencyCall:
    """
    Called when an operator (or automation) commits a hospital for the call.
    Re-dispatching an already dispatched call replaces the selection.
    """
    dispatched = transition_call(call, CallStatus.DISPATCHED, now)
    return replace(
        dispatched,
        selected_hospital_id=hospital_id,
        estimated_time=estimated_time,
        distance=distance,
    )
