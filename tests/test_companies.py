from conftest import _create_company, _submit_review, _approve
from jobsolution.db import company_db
from jobsolution.models.review_model import Review


def test_create_company_builds_transliterated_slug(client, admin, reference):
    company = _create_company(client, admin, reference, name="Яндекс Маркет")
    assert company["slug"] == f"yandeks-market-{company['id']}"
    assert company["size_description"]
    assert company["reviews_count"] == 0
    assert company["average_rating"] == 0
    assert [i["id"] for i in company["industries"]] == [reference["industry_id"]]
    assert company["city"]["id"] == reference["city_id"]


def test_get_company_by_id_and_slug(client, company):
    by_id = client.get(f"/api/companies/{company['id']}")
    assert by_id.status_code == 200, by_id.text
    by_slug = client.get(f"/api/companies/{company['slug']}")
    assert by_slug.status_code == 200, by_slug.text
    assert by_id.json()["id"] == by_slug.json()["id"]

    assert client.get("/api/companies/999999").status_code == 404
    assert client.get("/api/companies/no-such-company").status_code == 404


def test_create_company_validation(client, admin, reference):
    name = "Acme Corp"
    _create_company(client, admin, reference, name=name)

    def post(**payload):
        base = {"name": "Other Corp", "size": "small", "city_id": reference["city_id"], "industries": [reference["industry_id"]]}
        base.update(payload)
        return client.post("/api/admin/companies", json=base, headers=admin.headers)

    assert post(name=name).status_code == 409
    assert post(industries=[]).status_code == 400
    assert post(industries=[999999]).status_code == 400
    assert post(size="huge").status_code == 400
    assert post(city_id=999999).status_code == 400


def test_company_management_requires_admin(client, user, reference):
    payload = {"name": "Forbidden Inc", "size": "small", "city_id": reference["city_id"], "industries": [reference["industry_id"]]}
    assert client.post("/api/admin/companies", json=payload).status_code == 401
    assert client.post("/api/admin/companies", json=payload, headers=user.headers).status_code == 403


def test_list_companies_filters_and_pagination(client, admin, reference):
    alpha = _create_company(client, admin, reference, name="Alpha Soft", size="small")
    _create_company(
        client, admin, reference, name="Beta Bank", size="enterprise",
        industries=[reference["other_industry_id"]], city_id=reference["other_city_id"],
    )
    _create_company(client, admin, reference, name="Gamma Labs", size="small")

    body = client.get("/api/companies").json()
    assert body["pagination"] == {"total": 3, "page": 1, "limit": 10, "pages": 1}
    assert set(body["company_sizes"]) == {"small", "medium", "large", "enterprise"}

    names = [c["name"] for c in client.get("/api/companies?sort_by=name&sort_order=asc").json()["companies"]]
    assert names == ["Alpha Soft", "Beta Bank", "Gamma Labs"]

    assert [c["id"] for c in client.get("/api/companies?search=alpha").json()["companies"]] == [alpha["id"]]
    assert client.get("/api/companies?size=small").json()["pagination"]["total"] == 2
    assert client.get(f"/api/companies?industries={reference['other_industry_id']}").json()["pagination"]["total"] == 1
    both = f"{reference['industry_id']},{reference['other_industry_id']}"
    assert client.get(f"/api/companies?industries={both}").json()["pagination"]["total"] == 3
    assert client.get(f"/api/companies?city_id={reference['other_city_id']}").json()["pagination"]["total"] == 1
    assert client.get("/api/companies?city=kazan").json()["pagination"]["total"] == 1

    page = client.get("/api/companies?sort_by=name&sort_order=asc&page=2&limit=2").json()
    assert page["pagination"] == {"total": 3, "page": 2, "limit": 2, "pages": 2}
    assert [c["name"] for c in page["companies"]] == ["Gamma Labs"]

    assert client.get("/api/companies?limit=101").status_code == 400
    assert client.get("/api/companies?sort_by=unknown").status_code == 400
    assert client.get("/api/companies?industries=abc").status_code == 400


def test_min_rating_filter(client, admin, moderator, user, reference):
    good = _create_company(client, admin, reference, name="Good Place")
    _create_company(client, admin, reference, name="Unrated Place")
    review = _submit_review(client, user, good["id"], reference)
    _approve(client, moderator, review["id"])

    body = client.get("/api/companies?min_rating=4").json()
    assert [c["id"] for c in body["companies"]] == [good["id"]]


def test_update_company_regenerates_slug(client, admin, reference, company):
    payload = {
        "name": "Renamed Company",
        "size": "large",
        "city_id": reference["other_city_id"],
        "industries": [reference["other_industry_id"]],
        "website": "https://renamed.example.org",
    }
    resp = client.put(f"/api/admin/companies/{company['id']}", json=payload, headers=admin.headers)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["slug"] == f"renamed-company-{company['id']}"
    assert body["size"] == "large"
    assert [i["id"] for i in body["industries"]] == [reference["other_industry_id"]]
    assert body["website"] == "https://renamed.example.org"


def test_delete_company_removes_its_reviews(client, db, admin, user, reference, company):
    _submit_review(client, user, company["id"], reference)

    resp = client.delete(f"/api/admin/companies/{company['id']}", headers=admin.headers)
    assert resp.status_code == 200, resp.text
    assert client.get(f"/api/companies/{company['id']}").status_code == 404
    assert db.query(Review).filter(Review.company_id == company["id"]).count() == 0


def test_company_industries_endpoint(client, company, reference):
    resp = client.get(f"/api/industries/company/{company['id']}")
    assert resp.status_code == 200, resp.text
    assert [i["id"] for i in resp.json()] == [reference["industry_id"]]
    assert client.get("/api/industries/company/999999").status_code == 404


def test_duplicate_company_name_rejected_by_database(client, admin, reference, monkeypatch):
    _create_company(client, admin, reference, name="Acme Corp")
    other = _create_company(client, admin, reference, name="Other Corp")
    monkeypatch.setattr(company_db, "get_company_by_name", lambda db, name: None)

    payload = {"name": "Acme Corp", "size": "small", "city_id": reference["city_id"], "industries": [reference["industry_id"]]}
    resp = client.post("/api/admin/companies", json=payload, headers=admin.headers)
    assert resp.status_code == 409, resp.text
    resp = client.put(f"/api/admin/companies/{other['id']}", json=payload, headers=admin.headers)
    assert resp.status_code == 409, resp.text
    assert client.get(f"/api/companies/{other['id']}").json()["name"] == "Other Corp"
