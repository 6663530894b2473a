from __future__ import annotations

import os
import tomllib

from leadlovers_client import settings
from leadlovers_client.config_types import ClientConfig


def _use_tmp_config_dir(tmp_path, monkeypatch) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(settings, "user_config_dir", _config_dir)
    monkeypatch.delenv(settings.ENV_TOKEN, raising=False)


def test_load_config_missing_file_returns_defaults(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)

    assert settings.load_config() == ClientConfig()


def test_load_config_reads_client_table_and_profile(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text(
        '\n'.join(
            [
                "[client]",
                'token = "default-token"',
                "debug = true",
                'decode = "yes"',
                "",
                "[profiles.import]",
                'token = "import-token"',
                "upload = true",
                "",
            ]
        ),
        encoding="utf-8",
    )

    default = settings.load_config()
    imported = settings.load_config(profile="import")
    unknown = settings.load_config(profile="missing")

    assert default == ClientConfig(token="default-token", debug=True)
    assert imported == ClientConfig(token="import-token", debug=True, upload=True)
    assert unknown == default


def test_env_token_overrides_file(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text('[client]\ntoken = "file-token"\n', encoding="utf-8")
    monkeypatch.setenv(settings.ENV_TOKEN, "env-token")

    assert settings.load_config().token == "env-token"


def test_save_config_writes_private_file(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)

    path = settings.save_config(ClientConfig(token="secret", decode=False))

    assert path.endswith("config.toml")
    assert os.stat(path).st_mode & 0o777 == 0o600
    with open(path, "rb") as f:
        data = tomllib.load(f)
    assert data["client"] == {"token": "secret", "debug": False, "upload": False, "decode": False}


def test_save_profile_keeps_other_tables(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    settings.save_config(ClientConfig(token="main"))

    settings.save_config(ClientConfig(token="bulk", upload=True), profile="bulk")

    assert settings.load_config().token == "main"
    assert settings.load_config(profile="bulk") == ClientConfig(token="bulk", upload=True)
