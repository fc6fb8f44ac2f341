from pathlib import Path

from dailyposts.settings import Settings, choose_env_file


def test_content_paths_follow_content_dir():
    s = Settings(CONTENT_DIR="/srv/site/content", POSTS_SUBDIR="articles")

    assert s.posts_dir == Path("/srv/site/content/articles")
    assert s.categories_dir == Path("/srv/site/content/categories")
    assert s.authors_dir == Path("/srv/site/content/authors")


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("FEED_LIMIT", "10")
    monkeypatch.setenv("SITE_URL", "https://staging.devops-daily.com")

    s = Settings()

    assert s.FEED_LIMIT == 10
    assert s.SITE_URL == "https://staging.devops-daily.com"


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
