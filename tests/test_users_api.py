from slotbook.models import User


def test_register_member_hides_password(client):
    response = client.post(
        "/register",
        json={"name": "Alice", "email": "Alice@Example.com", "password": "pw-123", "userType": "member"},
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "alice@example.com"
    assert user["userType"] == "member"
    assert user["category"] is None
    assert user["specialization"] is None
    assert "password" not in user
    assert "passwordHash" not in user


def test_password_is_stored_hashed(client, db_session, member):
    stored = db_session.query(User).filter(User.id == member["id"]).one()
    assert stored.password_hash != "s3cret-pass"
    assert stored.password_hash.startswith("$2")


def test_member_specialist_fields_are_dropped(client):
    response = client.post(
        "/register",
        json={
            "name": "Bob",
            "email": "bob@example.com",
            "password": "pw",
            "userType": "member",
            "category": "education",
            "specialization": "Math Tutor",
        },
    )

    user = response.json()["user"]
    assert user["category"] is None
    assert user["specialization"] is None


def test_register_duplicate_email(client, member):
    response = client.post(
        "/register",
        json={"name": "Alice 2", "email": "ALICE@example.com", "password": "x", "userType": "member"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_specialist_requires_valid_category(client):
    response = client.post(
        "/register",
        json={
            "name": "Sam",
            "email": "sam@example.com",
            "password": "pw",
            "userType": "specialist",
            "category": "astrology",
            "specialization": "Stars",
        },
    )
    assert response.status_code == 400


def test_specialist_requires_specialization(client):
    response = client.post(
        "/register",
        json={
            "name": "Sam",
            "email": "sam@example.com",
            "password": "pw",
            "userType": "specialist",
            "category": "healthcare",
        },
    )
    assert response.status_code == 400


def test_login(client, member):
    response = client.post("/login", json={"email": "alice@example.com", "password": "s3cret-pass"})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == member["id"]
    assert "password" not in response.json()["user"]


def test_login_wrong_password(client, member):
    response = client.post("/login", json={"email": "alice@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_login_unknown_email(client):
    response = client.post("/login", json={"email": "ghost@example.com", "password": "nope"})
    assert response.status_code == 401


def test_update_profile(client, member):
    response = client.put(
        f"/profile/{member['id']}",
        json={"name": "Alice Cooper", "phone": "555-0100", "profilePhoto": "data:image/png;base64,AAAA"},
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["name"] == "Alice Cooper"
    assert user["phone"] == "555-0100"
    assert user["profilePhoto"] == "data:image/png;base64,AAAA"
    assert user["email"] == "alice@example.com"


def test_update_profile_keeps_unset_fields(client, member):
    client.put(f"/profile/{member['id']}", json={"phone": "555-0100"})
    response = client.put(f"/profile/{member['id']}", json={"name": "Alice B"})

    user = response.json()["user"]
    assert user["name"] == "Alice B"
    assert user["phone"] == "555-0100"


def test_update_profile_unknown_user(client):
    response = client.put("/profile/does-not-exist", json={"name": "X"})
    assert response.status_code == 404


def test_search_without_filters_returns_all_specialists(client, register_user, specialist, member):
    register_user(
        name="Greta Groomer",
        email="greta@example.com",
        userType="specialist",
        category="personal care",
        specialization="Hair Stylist",
    )

    response = client.get("/search/specialists")

    assert response.status_code == 200
    specialists = response.json()["specialists"]
    assert {s["name"] for s in specialists} == {"Dana Tutor", "Greta Groomer"}
    assert all(s["userType"] == "specialist" for s in specialists)
    assert all("password" not in s and "passwordHash" not in s for s in specialists)


def test_search_by_text_and_category(client, register_user, specialist):
    register_user(
        name="Mark Medic",
        email="mark@example.com",
        userType="specialist",
        category="healthcare",
        specialization="Pediatrician",
    )
    register_user(
        name="Tina Teacher",
        email="tina@example.com",
        userType="specialist",
        category="education",
        specialization="Piano",
    )

    by_specialization = client.get("/search/specialists", params={"q": "math"}).json()["specialists"]
    assert [s["name"] for s in by_specialization] == ["Dana Tutor"]

    by_name = client.get("/search/specialists", params={"q": "MEDIC"}).json()["specialists"]
    assert [s["name"] for s in by_name] == ["Mark Medic"]

    by_category = client.get("/search/specialists", params={"category": "education"}).json()["specialists"]
    assert [s["name"] for s in by_category] == ["Dana Tutor", "Tina Teacher"]

    combined = client.get(
        "/search/specialists", params={"q": "tutor", "category": "healthcare"}
    ).json()["specialists"]
    assert combined == []


def test_search_treats_wildcards_literally(client, specialist):
    response = client.get("/search/specialists", params={"q": "%"})
    assert response.json()["specialists"] == []


def test_search_category_is_case_insensitive(client, specialist):
    response = client.get("/search/specialists", params={"category": " Education "})

    assert response.status_code == 200
    assert [s["name"] for s in response.json()["specialists"]] == ["Dana Tutor"]


def test_search_rejects_unknown_category(client, specialist):
    response = client.get("/search/specialists", params={"category": "astrology"})
    assert response.status_code == 400
