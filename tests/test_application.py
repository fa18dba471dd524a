from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from userdir import create_application
from userdir.config import Settings


def test_application_serves_seeded_users(tmp_path: Path) -> None:
    seed = tmp_path / "users.yaml"
    seed.write_text(
        "users:\n  - firstName: Anna\n    lastName: Smith\n    email: anna@example.com\n",
        encoding="utf-8",
    )

    app = create_application(settings=Settings(title="Staff Directory", seed_path=seed))

    with TestClient(app) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert "Anna Smith" in response.text
    assert "Staff Directory" in response.text
    assert len(app.state.store) == 1


def test_applications_do_not_share_state() -> None:
    first = create_application(settings=Settings())
    second = create_application(settings=Settings())

    with TestClient(first) as client:
        client.post(
            "/create",
            data={"firstName": "Anna", "lastName": "Smith", "email": "anna@example.com"},
            follow_redirects=False,
        )

    assert len(first.state.store) == 1
    assert len(second.state.store) == 0
