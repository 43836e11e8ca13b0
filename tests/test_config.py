from rollbar_sourcemap.config import Settings, get_settings
from rollbar_sourcemap.constants import ROLLBAR_ENDPOINT


def test_defaults_leave_required_fields_empty():
    settings = get_settings()

    assert settings.access_token == ""
    assert settings.version == ""
    assert settings.public_path == ""
    assert settings.endpoint == ROLLBAR_ENDPOINT
    assert settings.silent is False
    assert settings.ignore_errors is False
    assert settings.encode_filename is False


def test_reads_rollbar_prefixed_env(monkeypatch):
    monkeypatch.setenv("ROLLBAR_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("ROLLBAR_VERSION", "abc123")
    monkeypatch.setenv("ROLLBAR_PUBLIC_PATH", "https://cdn.example.com")
    monkeypatch.setenv("ROLLBAR_INCLUDE_CHUNKS", "app, vendor,")
    monkeypatch.setenv("ROLLBAR_IGNORE_ERRORS", "true")

    options = get_settings().to_options()

    assert options.access_token == "tok"
    assert options.version == "abc123"
    assert options.public_path == "https://cdn.example.com"
    assert options.include_chunks == ["app", "vendor"]
    assert options.ignore_errors is True
    assert options.rollbar_endpoint == ROLLBAR_ENDPOINT


def test_blank_endpoint_uses_default(monkeypatch):
    monkeypatch.setenv("ROLLBAR_ENDPOINT", "")
    assert get_settings().endpoint == ROLLBAR_ENDPOINT


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("ROLLBAR_VERSION=from-dotenv\n")
    assert Settings().version == "from-dotenv"
