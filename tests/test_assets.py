from .conftest import PDF_BYTES, PNG_BYTES


def _upload_image(client, headers, data=PNG_BYTES, mime="image/png", title="Avatar"):
    return client.post(
        "/api/images-blob",
        files={"image": ("avatar.png", data, mime)},
        data={"title": title},
        headers=headers,
    )


def _upload_cv(client, headers, member="bisan", data=PDF_BYTES, mime="application/pdf", url="/api/admin/cv"):
    return client.post(
        url,
        files={"file": ("cv.pdf", data, mime)},
        data={"member": member},
        headers=headers,
    )


# ----------------------
# Images
# ----------------------
def test_image_upload_and_fetch(client, admin_headers):
    res = _upload_image(client, admin_headers)
    assert res.status_code == 201, res.text
    meta = res.json()
    assert meta["title"] == "Avatar"
    assert meta["mime"] == "image/png"
    assert meta["bytes"] == len(PNG_BYTES)
    assert "data" not in meta

    blob = client.get(f"/api/images-blob/{meta['id']}")
    assert blob.status_code == 200
    assert blob.content == PNG_BYTES
    assert blob.headers["content-type"] == "image/png"

    listing = client.get("/api/images-blob").json()
    assert [m["id"] for m in listing] == [meta["id"]]
    assert "data" not in listing[0]


def test_missing_image_is_empty_404(client):
    res = client.get("/api/images-blob/12345")
    assert res.status_code == 404
    assert res.content == b""


def test_image_upload_requires_admin(client):
    assert _upload_image(client, {}).status_code == 401
    assert client.get("/api/images-blob").json() == []


def test_image_type_allow_list(client, admin_headers):
    res = _upload_image(client, admin_headers, data=b"plain text", mime="text/plain")
    assert res.status_code == 400
    assert res.json()["message"].startswith("Unsupported file type")


def test_image_size_ceiling(make_client):
    client = make_client(IMAGE_MAX_BYTES=64)
    token = client.post("/api/admin/login", json={"username": "awsam", "password": "1601"}).json()["token"]
    headers = {"Authorization": f"Bearer {token}"}

    res = _upload_image(client, headers, data=b"\x89PNG" + b"0" * 100)
    assert res.status_code == 400
    assert res.json()["message"].startswith("File too large")

    assert _upload_image(client, headers, data=b"\x89PNG" + b"0" * 60).status_code == 201


# ----------------------
# CVs
# ----------------------
def test_cv_upload_is_upsert(client, admin_headers):
    first = _upload_cv(client, admin_headers, data=PDF_BYTES)
    assert first.status_code == 200, first.text
    second_payload = PDF_BYTES + b"% second version\n"
    second = _upload_cv(client, admin_headers, data=second_payload, url="/api/cv")
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["bytes"] == len(second_payload)

    rows = client.get("/api/cv", params={"member": "bisan"}).json()
    assert len(rows) == 1
    assert rows[0]["mime"] == "application/pdf"

    latest = client.get("/api/cv/latest", params={"member": "bisan"})
    assert latest.status_code == 200
    assert latest.content == second_payload
    assert latest.headers["content-type"] == "application/pdf"
    assert latest.headers["content-disposition"].startswith("inline")


def test_cv_download_disposition(client, admin_headers):
    _upload_cv(client, admin_headers, member="awsam")
    res = client.get("/api/cv/latest", params={"member": "awsam", "download": "1"})
    assert res.status_code == 200
    assert res.headers["content-disposition"] == 'attachment; filename="cv.pdf"'


def test_cv_members_are_independent(client, admin_headers):
    _upload_cv(client, admin_headers, member="awsam")
    _upload_cv(client, admin_headers, member="bisan")
    assert sorted(r["member"] for r in client.get("/api/cv").json()) == ["awsam", "bisan"]


def test_cv_rejections(client, admin_headers):
    assert _upload_cv(client, admin_headers, member="mallory").status_code == 400
    assert _upload_cv(client, admin_headers, mime="image/png", data=PNG_BYTES).status_code == 400
    assert _upload_cv(client, {}).status_code == 401
    assert client.get("/api/cv").json() == []


def test_cv_latest_missing(client):
    assert client.get("/api/cv/latest", params={"member": "bisan"}).status_code == 404
    assert client.get("/api/cv/latest", params={"member": "nobody"}).status_code == 404
