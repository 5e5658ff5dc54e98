"""Tests for the SQLite user and token store."""

import pytest

from app.domain.errors import EmailAlreadyRegisteredError, UserNotFoundError


def test_create_user_starts_inactive_with_lowercased_email(persistence):
    user = persistence.create_user(name="Ana", email="Ana@Example.COM", password_hash="h")

    assert user.activated is False
    assert user.email == "ana@example.com"
    assert persistence.get_user_by_email("ANA@example.com").id == user.id


def test_replace_token_keeps_a_single_token_per_user(persistence, user):
    first = persistence.replace_token(user.id, "a" * 64)
    second = persistence.replace_token(user.id, "b" * 64)

    assert first.user_id == second.user_id == user.id
    assert persistence.get_token_for_user(user.id).token == "b" * 64
    assert persistence.consume_token("a" * 64) is None


def test_replace_token_for_unknown_user_raises(persistence):
    with pytest.raises(UserNotFoundError):
        persistence.replace_token(999, "c" * 64)


def test_consume_token_activates_user_and_deletes_token(persistence, user):
    persistence.replace_token(user.id, "d" * 64)

    assert persistence.consume_token("d" * 64) == user.id
    assert persistence.get_user_by_id(user.id).activated is True
    assert persistence.get_token_for_user(user.id) is None


def test_consume_token_requires_exact_match(persistence, user):
    persistence.replace_token(user.id, "e" * 64)

    assert persistence.consume_token("E" * 64) is None
    assert persistence.consume_token("e" * 63) is None
    assert persistence.get_user_by_id(user.id).activated is False


def test_consume_token_honours_not_before(persistence, user):
    persistence.replace_token(user.id, "f" * 64)

    assert persistence.consume_token("f" * 64, not_before="9999-01-01T00:00:00+00:00") is None
    assert persistence.get_token_for_user(user.id) is not None


def test_purge_tokens_older_than(persistence, user):
    persistence.replace_token(user.id, "0" * 64)

    assert persistence.purge_tokens_older_than("2000-01-01T00:00:00+00:00") == 0
    assert persistence.purge_tokens_older_than("9999-01-01T00:00:00+00:00") == 1
    assert persistence.get_token_for_user(user.id) is None


def test_create_user_with_taken_email_raises_domain_error(persistence, user):
    with pytest.raises(EmailAlreadyRegisteredError):
        persistence.create_user(name="Copy", email="U1@Example.com", password_hash="y")
