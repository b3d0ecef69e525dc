"""API tests for /api/v1/users — password hashing, unique email, filters."""

import bcrypt
import pytest

from db.models import User

URL = "/api/v1/users"


@pytest.fixture()
def make_user(client):
    def _make(name="Ada", email="ada@uni.ac.uk", role="STUDENT", gender="FEMALE", **extra):
        body = {"name": name, "email": email, "password": "s3cret", "role": role, "gender": gender}
        body.update(extra)
        resp = client.post(URL, json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


def test_password_is_hashed_and_never_returned(client, db_session, make_user):
    user = make_user()

    assert "password" not in user
    stored = db_session.get(User, user["id"]).password
    assert stored != "s3cret"
    assert bcrypt.checkpw(b"s3cret", stored.encode("utf-8"))


def test_get_and_list_hide_password(client, make_user):
    user = make_user()
    assert "password" not in client.get(f"{URL}/{user['id']}").json()
    assert all("password" not in u for u in client.get(URL).json()["data"])


def test_role_defaults_to_student(client):
    resp = client.post(URL, json={"name": "Ben", "email": "ben@uni.ac.uk", "password": "pw"})
    assert resp.status_code == 201
    assert resp.json()["role"] == "STUDENT"


def test_duplicate_email_is_409(client, make_user):
    make_user(email="dup@uni.ac.uk")
    resp = client.post(URL, json={"name": "Other", "email": "dup@uni.ac.uk", "password": "pw"})
    assert resp.status_code == 409
    assert resp.json()["error"] == "A user with this email already exists"


def test_update_to_taken_email_is_409(client, make_user):
    make_user(email="first@uni.ac.uk")
    second = make_user(name="Ben", email="second@uni.ac.uk")
    resp = client.put(f"{URL}/{second['id']}", json={"email": "first@uni.ac.uk"})
    assert resp.status_code == 409


def test_invalid_email_is_422(client):
    resp = client.post(URL, json={"name": "X", "email": "not-an-email", "password": "pw"})
    assert resp.status_code == 422


def test_university_name_is_included(client, make_university, make_user):
    uni = make_university(name="Northfield")
    user = make_user(universityId=uni["id"])
    assert user["university"] == {"name": "Northfield"}


def test_update_role(client, make_user):
    user = make_user(role="STUDENT")
    resp = client.put(f"{URL}/{user['id']}", json={"role": "COACH"})
    assert resp.status_code == 200
    assert resp.json()["role"] == "COACH"
    assert resp.json()["email"] == user["email"]


def test_delete(client, make_user):
    user = make_user()
    assert client.delete(f"{URL}/{user['id']}").status_code == 204
    assert client.get(f"{URL}/{user['id']}").status_code == 404


class TestListFilters:

    def test_role_and_gender(self, client, make_user):
        make_user(name="Ada", email="a@uni.ac.uk", role="COACH", gender="FEMALE")
        make_user(name="Ben", email="b@uni.ac.uk", role="COACH", gender="MALE")
        make_user(name="Cat", email="c@uni.ac.uk", role="STUDENT", gender="FEMALE")

        body = client.get(URL, params={"role": "COACH", "gender": "FEMALE"}).json()

        assert [u["name"] for u in body["data"]] == ["Ada"]

    def test_search_matches_role_text(self, client, make_user):
        make_user(name="Ada", email="a@uni.ac.uk", role="ADMIN")
        make_user(name="Ben", email="b@uni.ac.uk", role="STUDENT")

        body = client.get(URL, params={"search": "admin"}).json()

        assert [u["name"] for u in body["data"]] == ["Ada"]

    def test_sorting_by_password_is_rejected(self, client, make_user):
        make_user()
        resp = client.get(URL, params={"sortBy": "password"})
        assert resp.status_code == 422
        assert resp.json()["error"] == "Cannot sort users by 'password'"

    def test_university_filter_does_not_apply_to_users(self, client, make_university):
        uni = make_university()
        resp = client.get(URL, params={"universityId": uni["id"]})
        assert resp.status_code == 422
