"""API tests for /api/v1/sports."""

URL = "/api/v1/sports"


def test_create_with_university(client, make_university):
    uni = make_university(name="Northfield")
    resp = client.post(URL, json={"name": "Netball", "type": "TEAM", "universityId": uni["id"]})
    assert resp.status_code == 201
    body = resp.json()
    assert body["type"] == "TEAM"
    assert body["universityId"] == uni["id"]
    assert body["university"]["name"] == "Northfield"
    assert body["fixtures"] == []


def test_create_without_university(client):
    resp = client.post(URL, json={"name": "Chess", "type": "INDIVIDUAL"})
    assert resp.status_code == 201
    assert resp.json()["universityId"] is None


def test_unknown_university_is_422(client):
    resp = client.post(URL, json={"name": "Chess", "type": "INDIVIDUAL", "universityId": "ghost"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "universityId 'ghost' does not exist"


def test_invalid_type_is_422_with_details(client):
    resp = client.post(URL, json={"name": "Chess", "type": "BOARD"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "Validation failed"
    assert any(d["loc"][-1] == "type" for d in body["details"])


def test_get_includes_fixtures(client, make_sport, make_fixture):
    sport = make_sport()
    make_fixture(sport["id"], home="Lions", away="Bears")
    body = client.get(f"{URL}/{sport['id']}").json()
    assert [(f["homeTeam"], f["awayTeam"]) for f in body["fixtures"]] == [("Lions", "Bears")]


def test_update_type(client, make_sport):
    sport = make_sport(type="TEAM")
    resp = client.put(f"{URL}/{sport['id']}", json={"type": "INDIVIDUAL"})
    assert resp.status_code == 200
    assert resp.json()["type"] == "INDIVIDUAL"
    assert resp.json()["name"] == sport["name"]


def test_delete_removes_its_fixtures(client, make_sport, make_fixture):
    sport = make_sport()
    fixture = make_fixture(sport["id"])

    assert client.delete(f"{URL}/{sport['id']}").status_code == 204
    assert client.get(f"/api/v1/fixtures/{fixture['id']}").status_code == 404


def test_list_filtered_by_university(client, make_university, make_sport):
    north = make_university(name="North")
    south = make_university(name="South")
    make_sport(name="Hockey", university_id=north["id"])
    make_sport(name="Rowing", university_id=south["id"])

    body = client.get(URL, params={"universityId": south["id"]}).json()

    assert [s["name"] for s in body["data"]] == ["Rowing"]
    assert body["total"] == 1


def test_search_by_name(client, make_sport):
    make_sport(name="Table Tennis", type="INDIVIDUAL")
    make_sport(name="Tennis", type="INDIVIDUAL")
    make_sport(name="Football")

    body = client.get(URL, params={"search": "TENNIS", "sortBy": "name", "sortOrder": "desc"}).json()

    assert [s["name"] for s in body["data"]] == ["Tennis", "Table Tennis"]
