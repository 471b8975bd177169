from greyn.config import Settings


def test_development_urls():
    settings = Settings(environment="development", host="localhost", port=8000, frontend_host="localhost")

    assert settings.api.base_url == "http://localhost:8000"
    assert settings.api.frontend_url == "http://localhost:3000"


def test_production_urls_use_https():
    settings = Settings(environment="production", host="api.greyn.eco", frontend_host="greyn.eco")

    assert settings.api.base_url == "https://api.greyn.eco"
    assert settings.api.frontend_url == "https://greyn.eco"


def test_invitation_defaults():
    settings = Settings()

    assert settings.invitations.default_expiry_days == 7
    assert settings.invitations.code_generation_attempts == 10
    assert settings.database_url == settings.database.url
