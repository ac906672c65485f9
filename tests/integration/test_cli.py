from __future__ import annotations

import json

import responses

from conftest import BASE_URL

from swrzee_admin.app.main import EXIT_ERROR, EXIT_OK, EXIT_REDIRECT, main
from swrzee_admin.sdk import AuthStore


def _users(count: int) -> list[dict]:
    return [
        {"_id": f"id-{idx}", "userId": f"SWZ{idx:03d}", "firstName": f"User{idx:02d}", "email": f"u{idx}@example.com"}
        for idx in range(count)
    ]


def test_dashboard_requires_session(capsys) -> None:
    assert main(["dashboard", "--tab", "users"]) == EXIT_REDIRECT
    assert "Redirect: /" in capsys.readouterr().out


def test_whoami_requires_session(capsys) -> None:
    assert main(["whoami"]) == EXIT_REDIRECT


def test_whoami_prints_profile(capsys, signed_in) -> None:
    assert main(["whoami"]) == EXIT_OK

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"name": "Asha Rao", "email": "asha@example.com", "role": "admin", "userId": "SWZ001"}


@responses.activate
def test_login_command_stores_session(capsys, auth_store: AuthStore) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/auth/login-with-password",
        json={
            "success": True,
            "data": {
                "user": {"_id": "u-1", "firstName": "Asha", "lastName": "Rao", "role": "admin"},
                "tokens": {"accessToken": "cli-token", "refreshToken": "r"},
            },
        },
    )

    assert main(["login", "--email", "asha@example.com", "--password", "password123"]) == EXIT_OK

    out = capsys.readouterr().out
    assert "Signed in as Asha Rao" in out
    assert "Location: /dashboard" in out
    assert auth_store.read().access_token == "cli-token"


def test_login_command_reports_validation_error(capsys) -> None:
    assert main(["login", "--email", "asha@example.com", "--password", "short"]) == EXIT_ERROR

    assert json.loads(capsys.readouterr().out) == {"error": "Password must be at least 8 characters."}


@responses.activate
def test_superadmin_login_can_skip_admin_creation(capsys, monkeypatch) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/auth/login-with-password",
        json={
            "success": True,
            "data": {
                "user": {"_id": "root", "firstName": "Root", "role": "superadmin"},
                "tokens": {"accessToken": "root-token"},
            },
        },
    )
    monkeypatch.setattr("builtins.input", lambda _prompt: "")

    assert main(["login", "--email", "root@example.com", "--password", "password123"]) == EXIT_OK
    assert "Location: /dashboard" in capsys.readouterr().out


@responses.activate
def test_dashboard_users_table(capsys, signed_in) -> None:
    responses.add(responses.GET, f"{BASE_URL}/users", json={"success": True, "data": {"users": _users(12)}})

    code = main(["dashboard", "--tab", "users", "--sort", "firstName", "--desc", "--page", "2"])

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "Users: total=12 regular=12 admin=0 superadmin=0" in out
    assert "User06" in out
    assert "User11" not in out
    assert "Page 2/3 (12 matching, sort=firstName desc)" in out


@responses.activate
def test_dashboard_unknown_sort_field_is_an_error(capsys, signed_in) -> None:
    responses.add(responses.GET, f"{BASE_URL}/services", json={"success": True, "data": []})

    assert main(["dashboard", "--tab", "services", "--sort", "colour"]) == EXIT_ERROR


@responses.activate
def test_dashboard_load_failure_exit_code(capsys, signed_in) -> None:
    responses.add(responses.GET, f"{BASE_URL}/users", json={"success": False, "message": "Forbidden"}, status=403)

    assert main(["dashboard", "--tab", "users"]) == EXIT_ERROR
    assert json.loads(capsys.readouterr().out) == {"error": "Forbidden"}


def test_logout_command(capsys, auth_store: AuthStore, signed_in) -> None:
    assert main(["logout"]) == EXIT_OK
    assert auth_store.read().access_token is None


def test_login_command_when_signed_in_redirects(capsys, signed_in) -> None:
    with responses.RequestsMock() as mocked:
        assert main(["login", "--email", "asha@example.com", "--password", "password123"]) == EXIT_REDIRECT
        assert len(mocked.calls) == 0

    assert "Already signed in. Redirect: /dashboard" in capsys.readouterr().out
