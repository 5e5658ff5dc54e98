"""End-to-end tests for the account HTTP endpoints."""


def _register(client, email="u1@example.com", password="hunter22"):
    resp = client.post("/account/register", json={"name": "User One", "email": email, "password": password})
    assert resp.status_code == 201
    return resp.json()["user_id"]


def _token_for(client, user_id):
    return client.app.state.container.persistence.get_token_for_user(user_id).token


def test_health_endpoint(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True
    assert resp.json()["notifications"]["running"] is True


def test_register_rejects_duplicate_email(client):
    _register(client)

    resp = client.post("/account/register", json={"name": "Again", "email": "u1@example.com", "password": "hunter22"})
    assert resp.status_code == 400


def test_verify_link_activates_and_redirects_to_login(client):
    user_id = _register(client)
    token = _token_for(client, user_id)

    resp = client.get(f"/account/verify/{token}", follow_redirects=False)

    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"
    assert client.app.state.container.persistence.get_user_by_id(user_id).activated is True


def test_verify_with_consumed_or_unknown_token_is_404(client):
    user_id = _register(client)
    token = _token_for(client, user_id)
    client.get(f"/account/verify/{token}", follow_redirects=False)

    for candidate in (token, "deadbeef"):
        resp = client.get(f"/account/verify/{candidate}", follow_redirects=False)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Invalid or expired verification link."


def test_login_requires_activation(client):
    user_id = _register(client)

    resp = client.post("/account/login", json={"email": "u1@example.com", "password": "hunter22"})
    assert resp.status_code == 403
    assert "Confirm your account" in resp.json()["detail"]

    client.get(f"/account/verify/{_token_for(client, user_id)}", follow_redirects=False)

    resp = client.post("/account/login", json={"email": "u1@example.com", "password": "hunter22"})
    assert resp.status_code == 200
    assert resp.json()["token_type"] == "bearer"

    resp = client.post("/account/login", json={"email": "u1@example.com", "password": "nope-nope"})
    assert resp.status_code == 401


def test_resend_replaces_token(client):
    user_id = _register(client)
    first = _token_for(client, user_id)

    resp = client.get("/account/verify/resend/u1@example.com")
    assert resp.status_code == 202

    second = _token_for(client, user_id)
    assert second != first
    assert client.get(f"/account/verify/{first}", follow_redirects=False).status_code == 404
    assert client.get(f"/account/verify/{second}", follow_redirects=False).status_code == 303


def test_resend_unknown_email_is_404(client):
    resp = client.get("/account/verify/resend/nobody@example.com")
    assert resp.status_code == 404


def test_resend_for_activated_account_issues_new_token(client):
    user_id = _register(client)
    first = _token_for(client, user_id)
    client.get(f"/account/verify/{first}", follow_redirects=False)

    resp = client.get("/account/verify/resend/u1@example.com")
    assert resp.status_code == 202

    second = _token_for(client, user_id)
    assert second != first
    assert client.get(f"/account/verify/{first}", follow_redirects=False).status_code == 404
