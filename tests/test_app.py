"""Tests for the FastAPI web app."""

import importlib.util
import threading
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from member_poster.compositor import plan_geometry
from member_poster.store import MemberStore

APP_PATH = Path(__file__).resolve().parents[1] / "app" / "src" / "main.py"


def _load_web_module():
    spec = importlib.util.spec_from_file_location("member_poster_web", APP_PATH)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"Could not load module spec for {APP_PATH}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


web = _load_web_module()


class FakeMailer:
    """Records deliveries instead of talking to SMTP."""

    def __init__(self):
        self.sent: list[tuple[str, Path]] = []
        self._lock = threading.Lock()

    def send(self, member, poster_path):
        with self._lock:
            self.sent.append((member.email, Path(poster_path)))


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def client(tmp_path, template_path, logo_path, mailer):
    store = MemberStore(tmp_path / "members.xlsx")
    web.app.dependency_overrides[web.get_store] = lambda: store
    web.app.dependency_overrides[web.get_assets] = lambda: (template_path, logo_path)
    web.app.dependency_overrides[web.get_upload_dir] = lambda: tmp_path / "uploads"
    web.app.dependency_overrides[web.get_poster_dir] = lambda: tmp_path / "posters"
    web.app.dependency_overrides[web.get_mailer] = lambda: mailer
    yield TestClient(web.app)
    web.app.dependency_overrides.clear()


def _form(**overrides):
    data = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "9999999999",
        "designation": "Wealth Manager",
    }
    data.update(overrides)
    return data


def _register(client, photo_path, filename="asha.png", **overrides):
    return client.post(
        "/api/users",
        data=_form(**overrides),
        files={"photo": (filename, photo_path.read_bytes(), "image/png")},
    )


def _png(size, color) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_ping(client):
    assert client.get("/api/ping").json() == {"status": "ok"}


def test_register_saves_uploaded_photo(client, photo_path, tmp_path):
    """The uploaded photo is stored under the upload dir and linked from the row."""
    created = _register(client, photo_path)

    assert created.status_code == 201
    saved = Path(created.json()["photo"])
    assert saved.parent == tmp_path / "uploads"
    assert saved.name == "asha-rao-asha-example-com-wealth-manager.png"
    assert saved.read_bytes() == photo_path.read_bytes()
    stored = MemberStore(tmp_path / "members.xlsx").get("asha@example.com", "Wealth Manager")
    assert stored.photo == str(saved)


def test_register_rejects_undecodable_photo(client, tmp_path):
    response = client.post(
        "/api/users",
        data=_form(),
        files={"photo": ("asha.png", b"not an image", "image/png")},
    )

    assert response.status_code == 400
    assert "Cannot decode photo" in response.json()["detail"]
    assert client.get("/api/users").json() == []
    assert not (tmp_path / "uploads").exists()


def test_register_requires_photo(client):
    assert client.post("/api/users", data=_form()).status_code == 422


def test_duplicate_registration_keeps_existing_photo(client, photo_path, tmp_path):
    first = _register(client, photo_path)
    saved = Path(first.json()["photo"])

    duplicate = client.post(
        "/api/users",
        data=_form(),
        files={"photo": ("asha.png", _png((50, 50), (0, 0, 0)), "image/png")},
    )

    assert duplicate.status_code == 409
    assert saved.read_bytes() == photo_path.read_bytes()


def test_member_crud(client, photo_path):
    created = _register(client, photo_path)
    assert created.status_code == 201

    listed = client.get("/api/users", params={"q": "asha"})
    assert [m["email"] for m in listed.json()] == ["asha@example.com"]

    payload = dict(_form(phone="111"), photo=created.json()["photo"])
    updated = client.put("/api/users/asha@example.com/Wealth Manager", json=payload)
    assert updated.status_code == 200
    assert updated.json()["phone"] == "111"

    assert client.get("/api/stats").json()["wealth_managers"] == 1

    assert client.delete("/api/users/asha@example.com/Wealth Manager").status_code == 204
    assert client.delete("/api/users/asha@example.com/Wealth Manager").status_code == 404


def test_poster_endpoint_returns_image(client, photo_path):
    _register(client, photo_path)

    response = client.get("/api/poster/asha@example.com/Wealth Manager")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    assert response.content.startswith(b"\xff\xd8")


def test_poster_endpoint_errors(client, photo_path):
    assert client.get("/api/poster/ghost@example.com/Wealth Manager").status_code == 404

    created = _register(client, photo_path, email="nophoto@example.com")
    Path(created.json()["photo"]).unlink()
    assert client.get("/api/poster/nophoto@example.com/Wealth Manager").status_code == 400

    _register(client, photo_path)
    bad_format = client.get("/api/poster/asha@example.com/Wealth Manager", params={"format": "gif"})
    assert bad_format.status_code == 400


def test_send_posters_with_uploaded_template(client, photo_path, mailer, tmp_path):
    """An uploaded template replaces the configured one for the whole send."""
    _register(client, photo_path)
    _register(client, photo_path, email="ravi@example.com", name="Ravi", designation="Health insurance advisor")

    response = client.post(
        "/api/send-posters",
        data={"designation": "Wealth Manager"},
        files={"template": ("template.png", _png((400, 200), (20, 200, 40)), "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["sent"], body["failed"]) == (1, 0)
    assert [email for email, _ in mailer.sent] == ["asha@example.com"]
    poster_path = mailer.sent[0][1]
    assert poster_path.parent == tmp_path / "posters"
    with Image.open(poster_path) as img:
        assert img.size == (800, 400 + plan_geometry(800).footer_height)
        r, g, b = img.convert("RGB").getpixel((10, 10))
        assert abs(r - 20) < 10 and abs(g - 200) < 10 and abs(b - 40) < 10


def test_send_posters_uses_configured_template(client, photo_path, mailer):
    _register(client, photo_path)

    response = client.post("/api/send-posters", data={"designation": "Wealth Manager"})

    assert response.status_code == 200
    with Image.open(mailer.sent[0][1]) as img:
        assert img.size == (800, 600 + plan_geometry(800).footer_height)


def test_send_posters_rejects_bad_template_upload(client, photo_path, mailer):
    _register(client, photo_path)

    response = client.post(
        "/api/send-posters",
        data={"designation": "Wealth Manager"},
        files={"template": ("template.png", b"garbage", "image/png")},
    )

    assert response.status_code == 400
    assert "Cannot decode template" in response.json()["detail"]
    assert mailer.sent == []


def test_send_posters_without_any_template(client, logo_path):
    web.app.dependency_overrides[web.get_assets] = lambda: (None, logo_path)

    response = client.post("/api/send-posters", data={})

    assert response.status_code == 500
    assert "TEMPLATE_PATH" in response.json()["detail"]


def test_index_lists_members(client, photo_path):
    _register(client, photo_path)

    page = client.get("/")

    assert page.status_code == 200
    assert "asha@example.com" in page.text
