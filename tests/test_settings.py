"""
Tests for environment-driven settings.
"""

from config.settings import Settings


class TestCorsOrigins:
    def setup_method(self):
        self.origins = ["http://a.example", "https://b.example"]

    def test_space_separated_origin_variable(self, monkeypatch):
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        monkeypatch.setenv("ORIGIN", "http://a.example  https://b.example")
        assert Settings(_env_file=None).cors_origins == self.origins

    def test_json_list(self, monkeypatch):
        monkeypatch.delenv("ORIGIN", raising=False)
        monkeypatch.setenv("CORS_ORIGINS", '["http://a.example", "https://b.example"]')
        assert Settings(_env_file=None).cors_origins == self.origins

    def test_comma_separated(self, monkeypatch):
        monkeypatch.delenv("ORIGIN", raising=False)
        monkeypatch.setenv("CORS_ORIGINS", "http://a.example,https://b.example")
        assert Settings(_env_file=None).cors_origins == self.origins

    def test_default(self, monkeypatch):
        monkeypatch.delenv("ORIGIN", raising=False)
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        assert Settings(_env_file=None).cors_origins == ["http://localhost:5173"]
