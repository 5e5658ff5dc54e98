"""Tests for verification token issuing."""

import string

import pytest

from app.domain.errors import UserNotFoundError
from app.domain.models import User
from app.services.token_issuer import generate_token


def test_generated_tokens_are_64_hex_characters():
    token = generate_token()

    assert len(token) == 64
    assert set(token) <= set(string.hexdigits.lower())
    assert len(bytes.fromhex(token)) == 32


def test_generated_tokens_do_not_repeat():
    tokens = {generate_token() for _ in range(10_000)}

    assert len(tokens) == 10_000


def test_issue_stores_token_and_notifies_owner(issuer, persistence, notifier, user):
    token = issuer.issue(user)

    assert persistence.get_token_for_user(user.id).token == token
    assert notifier.sent == [(user.email, token)]


def test_reissue_replaces_previous_token(issuer, persistence, user):
    first = issuer.issue(user)
    second = issuer.issue(user)

    assert first != second
    assert persistence.get_token_for_user(user.id).token == second


def test_issue_for_unpersisted_user_fails_without_notifying(issuer, notifier):
    ghost = User(id=4242, name="Ghost", email="ghost@example.com", password_hash="x")

    with pytest.raises(UserNotFoundError):
        issuer.issue(ghost)
    assert notifier.sent == []
