"""
OAuth Manager Tests

Tests for token loading, refresh, consent flow and revoke, with the
Google auth classes patched out.

To run these tests:
    pytest tests/drive/auth/test_oauth_manager.py -v
"""

import os
from unittest.mock import MagicMock

import pytest

from drive.auth import oauth_manager as oauth_module
from drive.auth.oauth_manager import OAuthManager, build_client_config, run_initial_auth


def make_credentials(valid=True, expired=False, refresh_token="refresh"):
    credentials = MagicMock()
    credentials.valid = valid
    credentials.expired = expired
    credentials.refresh_token = refresh_token
    credentials.token = "access-token"
    credentials.to_json.return_value = '{"token": "access-token"}'
    return credentials


@pytest.fixture
def token_path(tmp_path):
    return str(tmp_path / "credentials" / "drive_token.json")


@pytest.fixture
def saved_token(token_path, monkeypatch):
    """A token file on disk that loads as valid credentials"""
    os.makedirs(os.path.dirname(token_path), exist_ok=True)
    with open(token_path, "w") as f:
        f.write("{}")

    credentials = make_credentials()
    monkeypatch.setattr(
        oauth_module.Credentials,
        "from_authorized_user_file",
        MagicMock(return_value=credentials),
    )
    return credentials


@pytest.mark.unit
def test_build_client_config():
    config = build_client_config("client-id", "secret")

    assert config["installed"]["client_id"] == "client-id"
    assert config["installed"]["client_secret"] == "secret"
    assert config["installed"]["token_uri"] == "https://oauth2.googleapis.com/token"


@pytest.mark.unit
def test_loads_saved_token(token_path, saved_token):
    manager = OAuthManager("client-id", token_path, interactive=False)

    assert manager.is_authenticated() is False  # nothing loaded yet
    assert manager.get_credentials() is saved_token
    assert manager.is_authenticated() is True


@pytest.mark.unit
def test_expired_token_is_refreshed(token_path, saved_token, monkeypatch):
    saved_token.expired = True
    monkeypatch.setattr(oauth_module, "Request", MagicMock())

    manager = OAuthManager("client-id", token_path, interactive=False)
    manager.get_credentials()

    saved_token.refresh.assert_called()


@pytest.mark.unit
def test_missing_token_non_interactive_raises(token_path):
    manager = OAuthManager("client-id", token_path, interactive=False)

    with pytest.raises(RuntimeError):
        manager.get_credentials()


@pytest.mark.unit
def test_missing_token_runs_consent_flow(token_path, monkeypatch):
    credentials = make_credentials()
    flow = MagicMock()
    flow.run_local_server.return_value = credentials
    from_client_config = MagicMock(return_value=flow)
    monkeypatch.setattr(oauth_module.InstalledAppFlow, "from_client_config", from_client_config)

    manager = OAuthManager("client-id", token_path, interactive=True, port=8095)

    assert manager.get_credentials() is credentials
    flow.run_local_server.assert_called_once_with(port=8095)
    with open(token_path) as f:
        assert f.read() == '{"token": "access-token"}'


@pytest.mark.unit
def test_revoke_removes_token(token_path, saved_token, monkeypatch):
    request_class = MagicMock()
    monkeypatch.setattr(oauth_module, "Request", request_class)
    manager = OAuthManager("client-id", token_path, interactive=False)
    manager.get_credentials()

    assert manager.revoke_credentials() is True

    assert not os.path.exists(token_path)
    assert manager.is_authenticated() is False
    call_kwargs = request_class.return_value.call_args.kwargs
    assert call_kwargs["method"] == "POST"
    assert "token=access-token" in call_kwargs["url"]


@pytest.mark.unit
def test_run_initial_auth_reports_failure(token_path, monkeypatch):
    monkeypatch.setattr(
        oauth_module.InstalledAppFlow,
        "from_client_config",
        MagicMock(side_effect=ValueError("bad client")),
    )

    assert run_initial_auth("client-id", token_path) is False
