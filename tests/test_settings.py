from pathlib import Path

from cms.settings import Settings, choose_env_file


def test_couchdb_url_uses_environment():
    s = Settings(
        COUCHDB_USERNAME="u",
        COUCHDB_PASSWORD="p",
        COUCHDB_HOST="h",
        COUCHDB_PORT=1234,
    )
    assert s.couchdb_url == "http://u:p@h:1234"


def test_github_config_built_from_settings():
    s = Settings(
        GITHUB_REPO_OWNER="acme",
        GITHUB_REPO_NAME="blog",
        GITHUB_TOKEN="t",
        GITHUB_BRANCH="trunk",
    )

    config = s.github_config

    assert (config.owner, config.repo, config.token, config.branch) == ("acme", "blog", "t", "trunk")
    assert config.api_url == "https://api.github.com"
    assert config.user_agent == "ailodi-cms"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_REPO_OWNER", "from-env")
    monkeypatch.setenv("SESSION_MAX_AGE", "60")

    s = Settings()

    assert s.GITHUB_REPO_OWNER == "from-env"
    assert s.SESSION_MAX_AGE == 60


def test_is_production():
    assert Settings(ENVIRONMENT="Production").is_production is True
    assert Settings(ENVIRONMENT="development").is_production is False


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
