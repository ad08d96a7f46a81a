from conftest import _create_company, _login, _submit_review, _approve


def test_get_and_update_profile(client, user):
    resp = client.get("/api/users/me", headers=user.headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["email"] == user.email

    resp = client.put(
        "/api/users/me",
        json={"first_name": "Anna", "last_name": "Ivanova", "phone": "79990001122"},
        headers=user.headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["first_name"] == "Anna"
    assert body["last_name"] == "Ivanova"
    assert body["phone"] == "79990001122"


def test_update_profile_rejects_bad_phone(client, user):
    resp = client.put("/api/users/me", json={"phone": "abc"}, headers=user.headers)
    assert resp.status_code == 400


def test_password_change_allows_login_with_new_password(client, user):
    resp = client.put("/api/users/me", json={"password": "Changed789!"}, headers=user.headers)
    assert resp.status_code == 200, resp.text
    _login(client, user.email, "Changed789!")


def test_my_reviews_lists_every_status(client, admin, moderator, user, reference):
    company = _create_company(client, admin, reference)
    first = _submit_review(client, user, company["id"], reference)
    _submit_review(client, user, company["id"], reference)
    _approve(client, moderator, first["id"])

    resp = client.get("/api/users/me/reviews", headers=user.headers)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["pagination"]["total"] == 2
    assert {r["status"] for r in body["reviews"]} == {"approved", "pending"}

    resp = client.get("/api/users/me/reviews?status=pending", headers=user.headers)
    assert [r["status"] for r in resp.json()["reviews"]] == ["pending"]
