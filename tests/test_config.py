"""
Tests for front-end settings
"""
from typing import Optional

from pricebook_web.config import WebSettings


class TestWebSettings:

    def test_api_key_defaults_to_none(self, monkeypatch):
        monkeypatch.delenv("PRICEBOOK_API_KEY", raising=False)

        assert WebSettings(_env_file=None).API_KEY is None
        assert WebSettings.model_fields["API_KEY"].annotation == Optional[str]

    def test_values_read_from_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("PRICEBOOK_API_KEY", "k3y")
        monkeypatch.setenv("PRICEBOOK_PAGE_SIZE", "24")

        settings = WebSettings(_env_file=None)

        assert settings.API_KEY == "k3y"
        assert settings.PAGE_SIZE == 24
