# studio_pos/api/v1/deps.py
from fastapi import Request

from studio_pos.domain.pos.session import BillingSession, SessionRegistry


def get_billing_sessions(request: Request) -> SessionRegistry:
    return request.app.state.billing_sessions


def get_billing_session(session_id: str, request: Request) -> BillingSession:
    return get_billing_sessions(request).get(session_id)
