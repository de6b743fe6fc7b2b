"""Tests for Settings."""

import pytest
from pydantic import ValidationError

from expo_push.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EXPO_PUSH_ACCESS_TOKEN", raising=False)
        settings = Settings()

        assert settings.push_url == "https://exp.host/--/api/v2/push/send"
        assert settings.receipts_url == "https://exp.host/--/api/v2/push/getReceipts"
        assert settings.chunk_size == 100
        assert settings.receipt_chunk_size == 1000
        assert settings.gzip_policy == "threshold"
        assert settings.gzip_threshold == 1024
        assert settings.access_token is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("EXPO_PUSH_CHUNK_SIZE", "25")
        monkeypatch.setenv("EXPO_PUSH_GZIP_POLICY", "never")
        monkeypatch.setenv("EXPO_PUSH_ACCESS_TOKEN", "s3cret")

        settings = Settings()

        assert settings.chunk_size == 25
        assert settings.gzip_policy == "never"
        assert settings.access_token.get_secret_value() == "s3cret"
        assert "s3cret" not in repr(settings)

    def test_zero_chunk_size_rejected(self):
        with pytest.raises(ValidationError):
            Settings(chunk_size=0)

    def test_unknown_gzip_policy_rejected(self):
        with pytest.raises(ValidationError):
            Settings(gzip_policy="sometimes")
