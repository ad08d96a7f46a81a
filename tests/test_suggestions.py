def _suggest(client, type="suggestion", text="Please add a salary calculator"):
    return client.post("/api/suggestions", json={"type": type, "text": text})


def test_anyone_can_send_a_suggestion(client):
    resp = _suggest(client, type="company", text="Add Horns and Hooves LLC")
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["type"] == "company"
    assert body["text"] == "Add Horns and Hooves LLC"
    assert body["created_at"]


def test_invalid_suggestions_are_rejected(client):
    assert _suggest(client, type="spam").status_code == 400
    assert _suggest(client, text="hey").status_code == 400


def test_admin_lists_and_filters_suggestions(client, admin, user):
    _suggest(client, type="company", text="Add Romashka LLC please")
    _suggest(client, text="Dark theme would be nice")
    _suggest(client, text="Show reviews by department")

    assert client.get("/api/suggestions").status_code == 401
    assert client.get("/api/suggestions", headers=user.headers).status_code == 403

    body = client.get("/api/suggestions", headers=admin.headers).json()
    assert body["pagination"]["total"] == 3
    assert body["suggestions"][0]["text"] == "Show reviews by department"

    body = client.get("/api/suggestions?type=company", headers=admin.headers).json()
    assert [s["type"] for s in body["suggestions"]] == ["company"]
    assert client.get("/api/suggestions?type=other", headers=admin.headers).status_code == 400


def test_admin_deletes_suggestion(client, admin):
    created = _suggest(client).json()
    url = f"/api/suggestions/{created['id']}"

    assert client.get(url, headers=admin.headers).json()["id"] == created["id"]
    assert client.delete(url, headers=admin.headers).status_code == 200
    assert client.get(url, headers=admin.headers).status_code == 404
    assert client.delete(url, headers=admin.headers).status_code == 404
