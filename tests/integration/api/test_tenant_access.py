from __future__ import annotations

from sqlalchemy import text

API = "/api/v1"


def _signup(client, email, company):
    response = client.post(
        f"{API}/auth/signup",
        json={"company_name": company, "full_name": f"{company} Admin", "email": email, "password": "s3cret-pass"},
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


def _auth_header(session):
    return {"Authorization": f"Bearer {session['tokens']['access_token']}"}


def _login(client, email, password="s3cret-pass"):
    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]


def _add_member(client, headers, email, role):
    response = client.post(
        f"{API}/team",
        json={"email": email, "full_name": email.split("@")[0].title(), "password": "s3cret-pass", "role": role},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


def _seed_campaign_with_prospect(client, headers):
    campaign = client.post(
        f"{API}/campaigns", json={"name": "Outbound", "message_template": "Hi {{first_name}}"}, headers=headers
    ).json()["data"]
    prospect = client.post(
        f"{API}/prospects",
        json={
            "campaign_id": campaign["id"],
            "linkedin_url": "https://linkedin.com/in/ann",
            "first_name": "Ann",
            "last_name": "Lee",
        },
        headers=headers,
    ).json()["data"]
    return campaign, prospect


def test_health_and_root_are_public(make_client):
    client = make_client()
    assert client.get(f"{API}/health").json()["status"] == "ok"
    assert client.get("/").json()["api_prefix"] == API


def test_signup_login_refresh_and_me(make_client):
    client = make_client()
    session = _signup(client, "owner@acme.test", "Acme")
    assert session["user"]["role"] == "admin"
    assert session["tokens"]["token_type"] == "bearer"

    logged_in = _login(client, "OWNER@acme.test")
    refreshed = client.post(f"{API}/auth/refresh", json={"refresh_token": logged_in["tokens"]["refresh_token"]})
    assert refreshed.status_code == 200
    me = client.get(f"{API}/auth/me", headers=_auth_header({"tokens": refreshed.json()["data"]})).json()["data"]
    assert me["email"] == "owner@acme.test"
    assert me["role_info"]["name"] == "Administrator"
    assert "company.manage" in me["permissions"]

    duplicate = client.post(
        f"{API}/auth/signup",
        json={"company_name": "Other", "full_name": "X", "email": "owner@acme.test", "password": "s3cret-pass"},
    )
    assert duplicate.status_code == 409


def test_authentication_failures_use_the_error_envelope(make_client):
    client = make_client()
    session = _signup(client, "owner@acme.test", "Acme")

    missing = client.get(f"{API}/campaigns")
    assert missing.status_code == 401
    assert missing.json()["success"] is False
    assert client.get(f"{API}/campaigns", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get(f"{API}/campaigns", headers={"Authorization": "Bearer not.a.jwt"}).status_code == 401
    refresh_as_access = {"Authorization": f"Bearer {session['tokens']['refresh_token']}"}
    assert client.get(f"{API}/campaigns", headers=refresh_as_access).status_code == 401

    bad_login = client.post(f"{API}/auth/login", json={"email": "owner@acme.test", "password": "wrong-pass"})
    assert bad_login.status_code == 401
    assert bad_login.json() == {"success": False, "error": "Invalid credentials."}


def test_validation_errors_return_400_envelope(make_client):
    client = make_client()
    headers = _auth_header(_signup(client, "owner@acme.test", "Acme"))
    response = client.post(f"{API}/campaigns", json={"name": ""}, headers=headers)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"
    assert body["details"]


def test_other_company_rows_are_not_found(make_client):
    client = make_client()
    acme = _auth_header(_signup(client, "owner@acme.test", "Acme"))
    globex = _auth_header(_signup(client, "owner@globex.test", "Globex"))
    campaign, prospect = _seed_campaign_with_prospect(client, acme)

    assert client.get(f"{API}/campaigns/{campaign['id']}", headers=globex).status_code == 404
    assert client.get(f"{API}/prospects/{prospect['id']}", headers=globex).status_code == 404
    assert client.patch(f"{API}/prospects/{prospect['id']}", json={"notes": "x"}, headers=globex).status_code == 404
    assert client.delete(f"{API}/campaigns/{campaign['id']}", headers=globex).status_code == 404
    assert client.get(f"{API}/campaigns", headers=globex).json()["data"] == []
    assert client.get(f"{API}/prospects", headers=globex).json()["pagination"]["total"] == 0
    attach = client.post(
        f"{API}/prospects",
        json={"campaign_id": campaign["id"], "linkedin_url": "https://linkedin.com/in/x", "first_name": "X", "last_name": "Y"},
        headers=globex,
    )
    assert attach.status_code == 404


def test_rep_access_is_limited_to_assigned_work(make_client):
    client = make_client()
    admin = _auth_header(_signup(client, "owner@acme.test", "Acme"))
    rep_profile = _add_member(client, admin, "rita@acme.test", "rep")
    _add_member(client, admin, "mike@acme.test", "manager")
    rep = _auth_header(_login(client, "rita@acme.test"))
    manager = _auth_header(_login(client, "mike@acme.test"))
    campaign, prospect = _seed_campaign_with_prospect(client, manager)

    assert client.post(f"{API}/campaigns", json={"name": "x", "message_template": "y"}, headers=rep).status_code == 403
    assert client.post(f"{API}/campaigns/{campaign['id']}/start", headers=rep).status_code == 403
    assert client.get(f"{API}/campaigns", headers=rep).json()["data"] == []
    assert client.get(f"{API}/prospects/{prospect['id']}", headers=rep).status_code == 404

    assigned = client.patch(
        f"{API}/prospects/{prospect['id']}", json={"assigned_to": rep_profile["id"]}, headers=manager
    )
    assert assigned.json()["data"]["assigned_to"] == rep_profile["id"]

    visible = client.get(f"{API}/campaigns", headers=rep).json()
    assert [item["id"] for item in visible["data"]] == [campaign["id"]]
    assert visible["data"][0]["stats"]["total_prospects"] == 1
    assert client.get(f"{API}/prospects/{prospect['id']}", headers=rep).status_code == 200
    assert client.delete(f"{API}/prospects/{prospect['id']}", headers=rep).status_code == 403

    own = client.post(
        f"{API}/prospects",
        json={"linkedin_url": "https://linkedin.com/in/own", "first_name": "Own", "last_name": "Lead"},
        headers=rep,
    ).json()["data"]
    assert own["assigned_to"] == rep_profile["id"]
    assert client.get(f"{API}/prospects", headers=rep).json()["pagination"]["total"] == 2
    assert client.get(f"{API}/analytics", headers=rep).json()["data"]["scope"] == "own"
    assert client.post(f"{API}/analytics/insights", json={}, headers=rep).status_code == 403


def test_team_and_company_management_permissions(make_client):
    client = make_client()
    admin = _auth_header(_signup(client, "owner@acme.test", "Acme"))
    _add_member(client, admin, "mike@acme.test", "manager")
    manager = _auth_header(_login(client, "mike@acme.test"))

    rep_profile = _add_member(client, manager, "rita@acme.test", "rep")
    promote_self = client.post(
        f"{API}/team",
        json={"email": "boss@acme.test", "full_name": "Boss", "password": "s3cret-pass", "role": "admin"},
        headers=manager,
    )
    assert promote_self.status_code == 403
    assert client.patch(f"{API}/team/{rep_profile['id']}/role", json={"role": "manager"}, headers=manager).status_code == 403
    promoted = client.patch(f"{API}/team/{rep_profile['id']}/role", json={"role": "manager"}, headers=admin)
    assert promoted.json()["data"]["role"] == "manager"
    assert client.get(f"{API}/team", headers=manager).json()["count"] == 3

    assert client.patch(f"{API}/company", json={"website": "https://acme.test"}, headers=manager).status_code == 403
    updated = client.patch(
        f"{API}/company", json={"website": "https://acme.test", "subscription_tier": "professional"}, headers=admin
    ).json()["data"]
    assert updated["website"] == "https://acme.test"
    assert updated["subscription_tier"] == "professional"
    assert client.get(f"{API}/company", headers=manager).json()["data"]["subscription_status"] == "trial"


def test_role_changes_apply_to_existing_tokens(make_client):
    client = make_client()
    admin = _auth_header(_signup(client, "owner@acme.test", "Acme"))
    rep_profile = _add_member(client, admin, "rita@acme.test", "rep")
    rep = _auth_header(_login(client, "rita@acme.test"))

    client.patch(f"{API}/team/{rep_profile['id']}/role", json={"role": "manager"}, headers=admin)
    response = client.post(f"{API}/campaigns", json={"name": "x", "message_template": "y"}, headers=rep)
    assert response.status_code == 200


def test_database_failures_use_error_envelope(make_client, database):
    client = make_client()
    admin = _auth_header(_signup(client, "owner@acme.test", "Acme"))
    with database.engine.begin() as conn:
        conn.execute(text("DROP TABLE messages"))
        conn.execute(text("DROP TABLE prospects"))
        conn.execute(text("DROP TABLE campaigns"))

    response = client.get(f"{API}/campaigns", headers=admin)
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Database error"


class ExplodingScraper:
    def scrape_profile(self, url):
        raise RuntimeError("parser crashed")


def test_unexpected_errors_use_error_envelope(make_client):
    client = make_client(profile_scraper=ExplodingScraper(), raise_server_exceptions=False)
    admin = _auth_header(_signup(client, "owner@acme.test", "Acme"))

    response = client.post(f"{API}/linkedin/scrape", json={"linkedinUrl": "https://linkedin.com/in/ann"}, headers=admin)
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
