"""
Settings tests

Tests environment-driven defaults via pydantic-settings.
"""

import pytest
from pydantic import ValidationError

from typst_ansi_hl.config import AppSettings


class TestAppSettings:
    """TYPST_ANSI_HL_* environment variables"""

    def test_defaults(self, monkeypatch):
        for name in ("STRIP_ANSI", "UNWRAP_CODEBLOCK", "SYNTAX_MODE", "DISCORD", "SOFT_LIMIT"):
            monkeypatch.delenv(f"TYPST_ANSI_HL_{name}", raising=False)
        settings = AppSettings(_env_file=None)
        assert settings.strip_ansi is True
        assert settings.unwrap_codeblock is False
        assert settings.syntax_mode == "markup"
        assert settings.discord is False
        assert settings.soft_limit is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("TYPST_ANSI_HL_SYNTAX_MODE", "code")
        monkeypatch.setenv("TYPST_ANSI_HL_SOFT_LIMIT", "2000")
        monkeypatch.setenv("TYPST_ANSI_HL_DISCORD", "true")
        settings = AppSettings(_env_file=None)
        assert settings.syntax_mode == "code"
        assert settings.soft_limit == 2000
        assert settings.discord is True

    @pytest.mark.parametrize(
        "name, value",
        [("TYPST_ANSI_HL_SOFT_LIMIT", "-1"), ("TYPST_ANSI_HL_SYNTAX_MODE", "prose")],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)
