from core.config import AppSettings, _parse_env_lines, write_user_env_vars


def test_defaults():
    settings = AppSettings(_env_file=None)

    assert settings.proxy_url == "https://proxy.golang.org"
    assert settings.download_chunk_size == 1024 * 1024
    assert settings.scratch_root is None


def test_proxy_url_trailing_slash_is_stripped():
    assert AppSettings(_env_file=None, proxy_url="https://goproxy.io/").proxy_url == "https://goproxy.io"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("MODDOC_PROXY_URL", "https://proxy.example.com")
    monkeypatch.setenv("MODDOC_REQUEST_TIMEOUT_SECONDS", "3.5")

    settings = AppSettings(_env_file=None)

    assert settings.proxy_url == "https://proxy.example.com"
    assert settings.request_timeout_seconds == 3.5


def test_write_user_env_vars_merges_existing(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"MODDOC_PROXY_URL": "https://a.example"}, env_path)
    write_user_env_vars({"MODDOC_LOG_LEVEL": "DEBUG"}, env_path)

    values = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    assert values == {"MODDOC_LOG_LEVEL": "DEBUG", "MODDOC_PROXY_URL": "https://a.example"}
