import time
from datetime import datetime


def _create_post(client, headers, **fields):
    body = {"title": "Hello World", "html": "<p>Hi</p>", **fields}
    res = client.post("/api/admin/blog", json=body, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def _publish(client, headers, post_id, publish):
    res = client.patch(f"/api/admin/blog/{post_id}/publish", json={"publish": publish}, headers=headers)
    assert res.status_code == 200, res.text
    return res.json()


def test_draft_is_hidden_from_public(client, admin_headers):
    post = _create_post(client, admin_headers)
    assert post["slug"] == "hello-world"
    assert post["is_published"] is False
    assert post["published_at"] is None

    assert client.get("/api/blog").json() == []
    assert client.get("/api/blog/hello-world").status_code == 404
    assert [p["id"] for p in client.get("/api/admin/blog", headers=admin_headers).json()] == [post["id"]]


def test_publish_round_trip(client, admin_headers):
    post = _create_post(client, admin_headers, is_published=False)

    published = _publish(client, admin_headers, post["id"], True)
    assert published["is_published"] is True
    assert published["published_at"] is not None

    public = client.get("/api/blog/hello-world")
    assert public.status_code == 200
    assert public.json()["id"] == post["id"]

    draft = _publish(client, admin_headers, post["id"], False)
    assert draft["is_published"] is False
    assert draft["published_at"] is None
    assert client.get("/api/blog").json() == []


def test_republish_keeps_first_published_at(client, admin_headers):
    post = _create_post(client, admin_headers)
    first = _publish(client, admin_headers, post["id"], True)
    again = _publish(client, admin_headers, post["id"], True)
    assert again["published_at"] == first["published_at"]
    assert again["is_published"] is True


def test_create_published_immediately(client, admin_headers):
    post = _create_post(client, admin_headers, is_published=True)
    assert post["is_published"] is True
    assert post["published_at"] is not None
    assert [p["slug"] for p in client.get("/api/blog").json()] == ["hello-world"]


def test_update_never_changes_publish_state(client, admin_headers):
    post = _create_post(client, admin_headers)
    res = client.put(
        f"/api/admin/blog/{post['id']}",
        json={"title": "Renamed", "is_published": True, "published_at": "2024-01-01T00:00:00Z"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Renamed"
    assert body["slug"] == "hello-world"
    assert body["is_published"] is False
    assert body["published_at"] is None


def test_duplicate_slug_conflicts(client, admin_headers):
    first = _create_post(client, admin_headers, slug="My Post")
    assert first["slug"] == "my-post"

    res = client.post(
        "/api/admin/blog", json={"title": "Other", "slug": "my-post", "html": "<p>x</p>"}, headers=admin_headers,
    )
    assert res.status_code == 409
    assert res.json() == {"message": "A post with this slug already exists"}

    other = _create_post(client, admin_headers, title="Other")
    res = client.put(f"/api/admin/blog/{other['id']}", json={"slug": "my-post"}, headers=admin_headers)
    assert res.status_code == 409


def test_required_fields(client, admin_headers):
    res = client.post("/api/admin/blog", json={"title": "T", "html": "   "}, headers=admin_headers)
    assert res.status_code == 400
    res = client.post("/api/admin/blog", json={"title": "!!!", "html": "<p>x</p>"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json() == {"message": "slug is required"}


def test_publish_missing_post(client, admin_headers):
    res = client.patch("/api/admin/blog/404/publish", json={"publish": True}, headers=admin_headers)
    assert res.status_code == 404


def test_delete_post(client, admin_headers):
    post = _create_post(client, admin_headers, is_published=True)
    assert client.delete(f"/api/admin/blog/{post['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/admin/blog/{post['id']}", headers=admin_headers).status_code == 404
    assert client.get("/api/blog").json() == []


def test_updated_at_moves_on_every_change(client, admin_headers):
    # sqlite CURRENT_TIMESTAMP has one second resolution
    post = _create_post(client, admin_headers)
    created = datetime.fromisoformat(post["updated_at"])

    time.sleep(1.1)
    res = client.put(f"/api/admin/blog/{post['id']}", json={"html": "<p>edited</p>"}, headers=admin_headers)
    assert res.status_code == 200
    edited = datetime.fromisoformat(res.json()["updated_at"])
    assert edited > created

    time.sleep(1.1)
    published = datetime.fromisoformat(_publish(client, admin_headers, post["id"], True)["updated_at"])
    assert published > edited
