def test_get_user_profile(client, register):
    user, _ = register("profile@example.com", role="school", ceo_name="Jane Doe")

    response = client.get(f"/api/v1/users/{user['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "school"
    assert body["ceo_name"] == "Jane Doe"
    assert "password" not in body


def test_get_missing_user(client):
    response = client.get("/api/v1/users/404")

    assert response.status_code == 404
    assert client.get("/api/v1/users/404/posts").status_code == 404


def test_update_profile_changes_only_given_fields(client, register):
    user, headers = register("edit@example.com", grade="9th", age=15)

    response = client.patch(
        "/api/v1/users/me",
        json={"grade": "10th", "profile_picture": "https://cdn.example.com/me.png"},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["grade"] == "10th"
    assert body["profile_picture"] == "https://cdn.example.com/me.png"
    assert body["age"] == 15
    assert body["full_name"] == user["full_name"]
    assert client.get("/api/v1/auth/me", headers=headers).json()["grade"] == "10th"


def test_update_profile_ignores_email_and_role(client, register):
    _, headers = register("fixed@example.com")

    response = client.patch(
        "/api/v1/users/me",
        json={"email": "other@example.com", "role": "teacher", "full_name": "  New   Name "},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "fixed@example.com"
    assert body["role"] == "student"
    assert body["full_name"] == "New Name"


def test_update_profile_requires_auth(client):
    assert client.patch("/api/v1/users/me", json={"grade": "1st"}).status_code == 401


def test_update_profile_refuses_null_required_fields(client, register):
    user, headers = register("nulls@example.com")

    for field in ("full_name", "phone"):
        response = client.patch("/api/v1/users/me", json={field: None}, headers=headers)
        assert response.status_code == 422

    me = client.get("/api/v1/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["full_name"] == user["full_name"]
    assert me.json()["phone"] == user["phone"]
    assert client.get(f"/api/v1/users/{user['id']}").status_code == 200


def test_update_profile_can_clear_optional_fields(client, register):
    _, headers = register("clear@example.com", school_name="Bole High")

    response = client.patch("/api/v1/users/me", json={"school_name": None}, headers=headers)

    assert response.status_code == 200
    assert response.json()["school_name"] is None
