import pytest

from config import get_settings_module
from src.checkin_penalty.checkin_penalty.container import build_notification_sender
from src.checkin_penalty.checkin_penalty.notifications import fcm_sender
from src.checkin_penalty.checkin_penalty.notifications.fcm_sender import FcmNotificationSender
from src.checkin_penalty.checkin_penalty.notifications.sender import LogOnlyNotificationSender


@pytest.mark.parametrize(
    "env,expected",
    [
        (None, "config.development"),
        ("prod", "config.production"),
        ("Production", "config.production"),
        ("test", "config.testing"),
        ("staging", "config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    if env is None:
        monkeypatch.delenv("APP_ENV", raising=False)
    else:
        monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


class _Settings:
    FCM_PROJECT_ID = ""
    FCM_CREDENTIALS_FILE = ""
    FCM_TIMEOUT_SECONDS = 2.0


def test_without_fcm_project_notifications_are_only_logged():
    assert isinstance(build_notification_sender(_Settings()), LogOnlyNotificationSender)


def test_fcm_project_selects_fcm_sender(monkeypatch):
    loaded = []
    monkeypatch.setattr(fcm_sender, "load_fcm_credentials", lambda path: loaded.append(path) or object())
    settings = _Settings()
    settings.FCM_PROJECT_ID = "studio-app"
    settings.FCM_CREDENTIALS_FILE = "/etc/fcm/key.json"

    assert isinstance(build_notification_sender(settings), FcmNotificationSender)
    assert loaded == ["/etc/fcm/key.json"]
