import pytest

from bigquery_client.config import ClientSettings, load_options_file


class TestClientSettings:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = ClientSettings()
        assert settings.root_url == "https://www.googleapis.com/bigquery/v2/"
        assert settings.upload_root_url == "https://www.googleapis.com/upload/bigquery/v2/"
        assert settings.access_token is None
        assert settings.max_workers == 4

    def test_env_vars(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BIGQUERY_ACCESS_TOKEN", "from-env")
        monkeypatch.setenv("BIGQUERY_TIMEOUT_SECONDS", "12.5")
        settings = ClientSettings()
        assert settings.access_token == "from-env"
        assert settings.timeout_seconds == 12.5

    def test_dotenv_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("BIGQUERY_API_KEY=dotenv-key\n")
        assert ClientSettings().api_key == "dotenv-key"

    def test_init_overrides_env(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BIGQUERY_API_KEY", "env")
        assert ClientSettings(api_key="explicit").api_key == "explicit"

    def test_invalid_timeout(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ValueError):
            ClientSettings(timeout_seconds=0)


class TestLoadOptionsFile:
    def test_yaml(self, tmp_path):
        f = tmp_path / "options.yaml"
        f.write_text("access_token: abc\ntimeout_seconds: 30\n")
        assert load_options_file(f) == {"access_token": "abc", "timeout_seconds": 30}

    def test_empty(self, tmp_path):
        f = tmp_path / "options.yaml"
        f.write_text("")
        assert load_options_file(f) == {}

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "options.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_options_file(f)
