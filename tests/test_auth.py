import pytest

from app.auth import verify_callback_token
from app.errors import ConfigurationError, UnauthorizedError


@pytest.fixture(autouse=True)
def callback_token(monkeypatch):
    monkeypatch.setenv("XENDIT_CALLBACK_TOKEN", "cb-secret")


class TestVerifyCallbackToken:
    def test_accepts_matching_token(self):
        verify_callback_token("cb-secret")

    @pytest.mark.parametrize("token", [None, "", "wrong", "cb-secrét", "тoken"])
    def test_rejects_other_tokens(self, token):
        with pytest.raises(UnauthorizedError):
            verify_callback_token(token)

    def test_non_ascii_configured_token(self, monkeypatch):
        monkeypatch.setenv("XENDIT_CALLBACK_TOKEN", "sécret")
        verify_callback_token("sécret")
        with pytest.raises(UnauthorizedError):
            verify_callback_token("secret")

    def test_unconfigured(self, monkeypatch):
        monkeypatch.delenv("XENDIT_CALLBACK_TOKEN")
        with pytest.raises(ConfigurationError):
            verify_callback_token("cb-secret")
