from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from userdir.config import (
    DEFAULT_PORT,
    SeedError,
    Settings,
    build_store,
    load_seed_users,
    load_settings,
)


def _write_seed(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "users.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings == Settings()
    assert settings.port == DEFAULT_PORT
    assert settings.seed_path is None


def test_load_settings_reads_environment(tmp_path: Path) -> None:
    settings = load_settings(
        {
            "USERDIR_TITLE": " Staff ",
            "USERDIR_HOST": "0.0.0.0",
            "USERDIR_PORT": "9000",
            "USERDIR_LOG_LEVEL": "debug",
            "USERDIR_SEED_PATH": str(tmp_path / "seed.yaml"),
        }
    )

    assert settings.title == "Staff"
    assert settings.host == "0.0.0.0"
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"
    assert settings.seed_path == (tmp_path / "seed.yaml").resolve()


@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_invalid_port_is_rejected(port: str) -> None:
    with pytest.raises(ValueError):
        load_settings({"USERDIR_PORT": port})


def test_seed_file_populates_store_in_order(tmp_path: Path) -> None:
    seed = _write_seed(
        tmp_path,
        """
        users:
          - firstName: Anna
            lastName: Smith
            email: anna@example.com
            age: 34
          - firstName: "  Bob "
            lastName: Jones
            email: bob@example.com
            bio: Keeps bees
        """,
    )

    store = build_store(Settings(seed_path=seed))

    users = store.list()
    assert [user.first_name for user in users] == ["Anna", "Bob"]
    assert users[0].age == 34
    assert users[1].bio == "Keeps bees"
    assert users[0].id < users[1].id


def test_invalid_seed_entry_raises(tmp_path: Path) -> None:
    seed = _write_seed(
        tmp_path,
        """
        users:
          - firstName: Anna
            lastName: Smith
            email: anna@example.com
          - firstName: R2D2
            lastName: Droid
            email: r2@example.com
        """,
    )

    with pytest.raises(SeedError) as excinfo:
        load_seed_users(seed)

    assert "Seed entry 1" in str(excinfo.value)
    assert "First name must only contain letters." in str(excinfo.value)


def test_empty_seed_file_yields_no_users(tmp_path: Path) -> None:
    seed = _write_seed(tmp_path, "")

    assert load_seed_users(seed) == []


def test_seed_users_must_be_a_list(tmp_path: Path) -> None:
    seed = _write_seed(tmp_path, "users: nobody\n")

    with pytest.raises(SeedError):
        load_seed_users(seed)


def test_build_store_without_seed_is_empty() -> None:
    assert len(build_store(Settings())) == 0


@pytest.mark.parametrize(
    ("line", "field"),
    [
        ("firstName: Yes", "firstName"),
        ("email: 42", "email"),
        ("bio: [one, two]", "bio"),
        ("age: true", "age"),
        ("age: 30.5", "age"),
    ],
)
def test_seed_entry_with_non_text_scalar_is_rejected(tmp_path: Path, line: str, field: str) -> None:
    entry = {
        "firstName": "firstName: Anna",
        "lastName": "lastName: Smith",
        "email": "email: anna@example.com",
    }
    key = line.split(":", 1)[0]
    entry[key] = line
    body = "\n".join(f"    {value}" if i else f"  - {value}" for i, value in enumerate(entry.values()))
    seed = _write_seed(tmp_path, f"users:\n{body}\n")

    with pytest.raises(SeedError) as excinfo:
        load_seed_users(seed)

    assert f"Seed entry 0 field '{field}'" in str(excinfo.value)


def test_seed_age_may_be_quoted(tmp_path: Path) -> None:
    seed = _write_seed(
        tmp_path,
        """
        users:
          - firstName: Anna
            lastName: Smith
            email: anna@example.com
            age: "41"
        """,
    )

    assert load_seed_users(seed)[0].age == 41
