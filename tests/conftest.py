import os

# Settings are read at import time, so the environment must be prepared first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SERVER_MODE"] = "test"

import uuid

import pytest
from fastapi.testclient import TestClient

from jobsolution.main import app
from jobsolution.config.database import Base, engine, SessionLocal
from jobsolution.db.user_db import create_user
from jobsolution.models.city_model import City
from jobsolution.models.industry_model import Industry
from jobsolution.models.lookup_model import RatingCategory, BenefitType, EmploymentType, EmploymentPeriod
from jobsolution.models.user_model import ROLE_ADMIN, ROLE_MODERATOR, ROLE_USER

PASSWORD = "Secret123!"


def _u(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def _email(prefix: str = "user") -> str:
    return f"{_u(prefix)}@mail.com"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _register(client, email=None, password=PASSWORD, **extra):
    payload = {"email": email or _email(), "password": password, "password_confirm": password}
    payload.update(extra)
    return client.post("/api/auth/register", json=payload)


def _login(client, email, password=PASSWORD):
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def _headers(tokens: dict) -> dict:
    return {"Authorization": f"Bearer {tokens['access_token']}"}


class Account:
    def __init__(self, id: int, email: str, headers: dict):
        self.id = id
        self.email = email
        self.headers = headers


@pytest.fixture
def make_account(client, db):
    """Create a user with the given role directly in the store and log in."""

    def _make(role: str = ROLE_USER) -> Account:
        email = _email(role)
        user = create_user(db, email=email, password=PASSWORD, role=role)
        db.commit()
        body = _login(client, email)
        return Account(user.id, email, _headers(body["tokens"]))

    return _make


@pytest.fixture
def admin(make_account):
    return make_account(ROLE_ADMIN)


@pytest.fixture
def moderator(make_account):
    return make_account(ROLE_MODERATOR)


@pytest.fixture
def user(make_account):
    return make_account(ROLE_USER)


@pytest.fixture
def reference(db):
    """Seed the lookup tables a company and a review need."""
    city = City(name="Moscow", region="Moscow", country="Russia")
    other_city = City(name="Kazan", region="Tatarstan", country="Russia")
    industry = Industry(name="IT", color="#2563eb")
    other_industry = Industry(name="Finance", color="#16a34a")
    salary = RatingCategory(name="Salary")
    management = RatingCategory(name="Management")
    benefit = BenefitType(name="Health insurance")
    employment_type = EmploymentType(name="Full-time")
    employment_period = EmploymentPeriod(name="1-3 years")
    db.add_all([
        city, other_city, industry, other_industry, salary, management,
        benefit, employment_type, employment_period,
    ])
    db.commit()
    return {
        "city_id": city.id,
        "other_city_id": other_city.id,
        "industry_id": industry.id,
        "other_industry_id": other_industry.id,
        "salary_id": salary.id,
        "management_id": management.id,
        "benefit_id": benefit.id,
        "employment_type_id": employment_type.id,
        "employment_period_id": employment_period.id,
    }


def _create_company(client, admin, reference, name=None, **overrides):
    payload = {
        "name": name or _u("Company"),
        "size": "medium",
        "city_id": reference["city_id"],
        "industries": [reference["industry_id"]],
    }
    payload.update(overrides)
    resp = client.post("/api/admin/companies", json=payload, headers=admin.headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _submit_review(client, account, company_id, reference, ratings=None, **overrides):
    if ratings is None:
        ratings = {reference["salary_id"]: 4, reference["management_id"]: 5}
    payload = {
        "company_id": company_id,
        "position": "Backend developer",
        "employment_type_id": reference["employment_type_id"],
        "employment_period_id": reference["employment_period_id"],
        "city_id": reference["city_id"],
        "category_ratings": {str(k): v for k, v in ratings.items()},
        "pros": "Friendly team and modern stack",
        "cons": "Too many meetings every week",
        "benefit_type_ids": [reference["benefit_id"]],
        "is_former_employee": False,
        "is_recommended": True,
    }
    payload.update(overrides)
    resp = client.post("/api/reviews", json=payload, headers=account.headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _approve(client, moderator, review_id):
    resp = client.put(f"/api/admin/reviews/{review_id}/approve", headers=moderator.headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def company(client, admin, reference):
    return _create_company(client, admin, reference)
