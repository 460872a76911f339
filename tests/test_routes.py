"""End-to-end checks over the HTTP surface."""


def _register(client, role="customer", name="Casey", email=None):
    response = client.post("/api/users", json={
        "name": name,
        "email": email or f"{name.lower()}@recyclink.org",
        "role": role,
        "vehicle_info": "Van" if role == "agent" else None,
    })
    assert response.status_code == 201, response.text
    return response.json()


def _as(user):
    return {"X-User-Id": user["user_id"]}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_register_and_fetch(client):
    user = _register(client)

    assert user["user_id"].startswith("USER-")
    assert user["rewards"] == 0
    assert user["stats"] == {
        "total_items": 0,
        "total_co2_saved": 0.0,
        "current_streak": 0,
        "total_pickups": 0,
    }

    detail = client.get(f"/api/users/{user['user_id']}").json()
    assert detail["rewards_history"] == []


def test_customer_vehicle_info_dropped(client):
    user = _register(client, role="customer", name="Dana")
    assert user["vehicle_info"] is None


def test_duplicate_email(client):
    _register(client)
    response = client.post("/api/users", json={"name": "Other", "email": "casey@recyclink.org"})
    assert response.status_code == 409


def test_me_requires_header(client):
    assert client.get("/api/users/me").status_code == 401
    assert client.get("/api/users/me", headers={"X-User-Id": "USER-missing"}).status_code == 401

    user = _register(client)
    assert client.get("/api/users/me", headers=_as(user)).json()["user_id"] == user["user_id"]


def test_classification_flow(client):
    user = _register(client)

    response = client.post(
        "/api/rewards/classifications",
        json={"category": "plastic", "label": "PET bottle", "item_count": 1, "weight_kg": 0.5},
        headers=_as(user),
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["points_awarded"] == 20
    assert body["rewards"] == 20
    assert body["stats"]["total_items"] == 1
    assert body["co2_saved"] == 1.0

    history = client.get(f"/api/rewards/users/{user['user_id']}/history").json()
    assert history["rewards"] == 20
    assert [h["reason"] for h in history["history"]] == ["Classified PET bottle"]


def test_classification_rejects_zero_items(client):
    user = _register(client)
    response = client.post(
        "/api/rewards/classifications",
        json={"category": "plastic", "item_count": 0},
        headers=_as(user),
    )
    assert response.status_code == 422


def test_classification_needs_customer_session(client):
    agent = _register(client, role="agent", name="Alex")
    payload = {"category": "plastic"}

    assert client.post("/api/rewards/classifications", json=payload).status_code == 401
    assert client.post("/api/rewards/classifications", json=payload, headers=_as(agent)).status_code == 403


def test_manual_award(client):
    user = _register(client)

    response = client.post(f"/api/rewards/users/{user['user_id']}/award", json={"amount": 15}, headers=_as(user))
    assert response.json()["awarded"] is True
    assert response.json()["rewards"] == 15
    assert response.json()["entry"]["reason"] == "Recycling activity"

    response = client.post(f"/api/rewards/users/{user['user_id']}/award", json={"amount": -20, "reason": "Correction"}, headers=_as(user))
    assert response.json()["rewards"] == -5


def test_manual_award_needs_signed_in_user(client):
    user = _register(client)

    anonymous = client.post(f"/api/rewards/users/{user['user_id']}/award", json={"amount": 1000000})
    assert anonymous.status_code == 401

    history = client.get(f"/api/rewards/users/{user['user_id']}/history").json()
    assert history["rewards"] == 0
    assert history["history"] == []


def test_manual_award_unknown_user(client):
    caller = _register(client)
    response = client.post("/api/rewards/users/USER-missing/award", json={"amount": 15}, headers=_as(caller))
    assert response.status_code == 200
    assert response.json() == {"user_id": "USER-missing", "awarded": False, "rewards": None, "entry": None}


def test_leaderboard(client):
    users = [_register(client, name=name) for name in ("Ada", "Bo", "Cy")]
    for user, amount in zip(users, (30, 90, 10)):
        client.post(f"/api/rewards/users/{user['user_id']}/award", json={"amount": amount}, headers=_as(user))
    _register(client, role="agent", name="Alex")

    board = client.get("/api/rewards/leaderboard", params={"limit": 2}).json()
    assert [(e["rank"], e["name"], e["rewards"]) for e in board] == [(1, "Bo", 90), (2, "Ada", 30)]

    agents = client.get("/api/rewards/leaderboard", params={"role": "agent"}).json()
    assert [e["name"] for e in agents] == ["Alex"]


def test_leaderboard_limit_bounds(client):
    assert client.get("/api/rewards/leaderboard", params={"limit": 0}).status_code == 422
    assert client.get("/api/rewards/leaderboard", params={"role": "admin"}).status_code == 422


def test_pickup_flow(client):
    customer = _register(client)
    agent = _register(client, role="agent", name="Alex")

    booked = client.post("/api/pickups", json={
        "date": "2026-03-12",
        "time_slot": "morning",
        "address": "12 Mill Lane",
        "items": "2 bags of plastic",
    }, headers=_as(customer))
    assert booked.status_code == 201, booked.text
    pickup = booked.json()
    pickup_id = pickup["pickup_id"]
    assert pickup["status"] == "scheduled"

    available = client.get("/api/pickups/available", headers=_as(agent)).json()
    assert [p["pickup_id"] for p in available] == [pickup_id]
    assert "verification_code" not in available[0]

    accepted = client.post(f"/api/pickups/{pickup_id}/accept", headers=_as(agent)).json()
    assert accepted["status"] == "in-progress"

    wrong = client.post(f"/api/pickups/{pickup_id}/complete", json={"verification_code": "XXXXXX"}, headers=_as(agent))
    assert wrong.status_code == 400

    done = client.post(
        f"/api/pickups/{pickup_id}/complete",
        json={"verification_code": pickup["verification_code"]},
        headers=_as(agent),
    ).json()
    assert done["pickup"]["status"] == "completed"
    assert done["agent_reward"] == 60
    assert done["customer_streak"] == 1

    rated = client.post(f"/api/pickups/{pickup_id}/rate", json={"rating": 5}, headers=_as(customer)).json()
    assert rated["bonus_awarded"] == 20

    streak = client.get(f"/api/rewards/customers/{customer['user_id']}/streak").json()
    assert streak == {"customer_id": customer["user_id"], "streak": 1}

    earnings = client.get(f"/api/agents/{agent['user_id']}/earnings").json()
    assert earnings["total"] == 80

    performance = client.get(f"/api/agents/{agent['user_id']}/performance").json()
    assert performance["completion_rate"] == 100
    assert performance["level"] == "Beginner"


def test_pickup_roles_enforced(client):
    customer = _register(client)
    agent = _register(client, role="agent", name="Alex")
    booking = {"date": "2026-03-12", "time_slot": "evening", "address": "12 Mill Lane"}

    assert client.post("/api/pickups", json=booking, headers=_as(agent)).status_code == 403
    assert client.get("/api/pickups/available", headers=_as(customer)).status_code == 403

    pickup_id = client.post("/api/pickups", json=booking, headers=_as(customer)).json()["pickup_id"]
    assert client.post(f"/api/pickups/{pickup_id}/rate", json={"rating": 5}, headers=_as(customer)).status_code == 400
    assert client.post(f"/api/pickups/{pickup_id}/rate", json={"rating": 6}, headers=_as(customer)).status_code == 422


def test_badge_progress(client):
    user = _register(client)
    client.post(
        "/api/rewards/classifications",
        json={"category": "paper", "item_count": 12},
        headers=_as(user),
    )

    badge = client.get(f"/api/rewards/users/{user['user_id']}/badge").json()
    assert badge["badge_level"] == "Green Warrior"
    assert badge["next_level"] == "Sustainability Champion"
    assert badge["items_to_next_level"] == 38
