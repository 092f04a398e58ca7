"""
Tests for application settings validation
"""

import pytest
from pydantic import ValidationError

from bookreview.config import Settings

VALID_KEY = "x" * 40


class TestSettings:
    def test_defaults(self):
        settings = Settings(secret_key=VALID_KEY)

        assert settings.token_expire_seconds == 3600
        assert settings.session_path_prefix == "/customer"
        assert settings.simulated_failure_rate == 0.0

    @pytest.mark.parametrize(
        "secret_key",
        ["REPLACE_WITH_YOUR_GENERATED_SECRET_KEY", "your-secret-key-goes-here-please-0000", "short"],
    )
    def test_rejects_weak_secret_key(self, secret_key: str):
        with pytest.raises(ValidationError):
            Settings(secret_key=secret_key)

    def test_log_level_is_normalized(self):
        assert Settings(secret_key=VALID_KEY, log_level="debug").log_level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(secret_key=VALID_KEY, log_level="chatty")

    def test_session_prefix_is_normalized(self):
        settings = Settings(secret_key=VALID_KEY, session_path_prefix="customer/")

        assert settings.session_path_prefix == "/customer"

    @pytest.mark.parametrize("rate", [-0.1, 1.1])
    def test_rejects_bad_failure_rate(self, rate: float):
        with pytest.raises(ValidationError):
            Settings(secret_key=VALID_KEY, simulated_failure_rate=rate)

    def test_rejects_non_positive_token_lifetime(self):
        with pytest.raises(ValidationError):
            Settings(secret_key=VALID_KEY, token_expire_seconds=0)

    def test_allowed_origins_list(self):
        settings = Settings(secret_key=VALID_KEY, allowed_origins="http://a, http://b")

        assert settings.allowed_origins_list == ["http://a", "http://b"]
