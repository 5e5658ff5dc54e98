from app.domain.models import Allow, Deny
from app.services.activation_gate import UNACTIVATED_REASON


def test_inactive_user_is_denied(gate, user):
    assert gate.check(user.email) == Deny(reason=UNACTIVATED_REASON)


def test_activated_user_is_allowed(gate, issuer, processor, user):
    processor.consume(issuer.issue(user))

    decision = gate.check("U1@example.com")

    assert isinstance(decision, Allow)
    assert decision.user.id == user.id


def test_unknown_email_is_allowed_without_user(gate):
    assert gate.check("nobody@example.com") == Allow(user=None)
