import pytest


@pytest.fixture
def teacher(register):
    return register("teacher@example.com", role="teacher")


def share(client, headers, title, resource_type, url="https://library.example.com/item", **extra):
    response = client.post(
        "/api/v1/resources",
        json={"title": title, "type": resource_type, "url": url, **extra},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_sharing_requires_auth(client):
    response = client.post(
        "/api/v1/resources",
        json={"title": "x", "type": "book", "url": "https://x"},
    )

    assert response.status_code == 401


def test_share_resource(client, teacher):
    user, headers = teacher

    resource = share(client, headers, "  Intro   to Fractions ", "video", description="  ")

    assert resource["title"] == "Intro to Fractions"
    assert resource["description"] is None
    assert resource["user_id"] == user["id"]
    assert resource["user"]["email"] == "teacher@example.com"


def test_list_resources_with_type_filter(client, teacher):
    _, headers = teacher
    book = share(client, headers, "Algebra I", "book")
    video = share(client, headers, "Photosynthesis", "video")
    worksheet = share(client, headers, "Times tables", "worksheet")

    everything = client.get("/api/v1/resources").json()
    videos = client.get("/api/v1/resources", params={"type": "video"}).json()

    assert [r["id"] for r in everything] == [book["id"], video["id"], worksheet["id"]]
    assert [r["id"] for r in videos] == [video["id"]]


def test_unknown_resource_type_rejected(client, teacher):
    _, headers = teacher

    assert client.get("/api/v1/resources", params={"type": "podcast"}).status_code == 422
    response = client.post(
        "/api/v1/resources",
        json={"title": "x", "type": "podcast", "url": "https://x"},
        headers=headers,
    )
    assert response.status_code == 422


def test_only_owner_deletes_resource(client, teacher, register):
    _, teacher_headers = teacher
    _, student_headers = register("student@example.com")
    resource = share(client, teacher_headers, "Algebra I", "book")
    url = f"/api/v1/resources/{resource['id']}"

    assert client.delete(url, headers=student_headers).status_code == 403

    response = client.delete(url, headers=teacher_headers)
    assert response.status_code == 200
    assert response.json()["id"] == resource["id"]

    assert client.get("/api/v1/resources").json() == []
    assert client.delete(url, headers=teacher_headers).status_code == 404


def test_delete_missing_resource(client, teacher):
    _, headers = teacher

    response = client.delete("/api/v1/resources/999", headers=headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Resource not found"
