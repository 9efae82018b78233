"""
Unit tests for ClientConfig and environment loading
"""

from unittest.mock import patch

import pytest

from trello_proxy import ClientConfig, ConfigurationError, TrelloConnection, board_from_url
from trello_proxy.config import DEFAULT_BASE_URL, load_environment, mask_secret, read_env_file


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig(api_key="key", token="token")

        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == 30.0
        assert config.max_retries == 3
        assert config.backoff_base == 1.0
        assert config.verify_ssl is True

    @pytest.mark.parametrize("api_key,token", [("", "token"), ("key", ""), ("", "")])
    def test_missing_credentials_raise(self, api_key, token):
        with pytest.raises(ConfigurationError, match="TRELLO_API_KEY and TRELLO_TOKEN"):
            ClientConfig(api_key=api_key, token=token)

    def test_max_retries_must_be_positive(self):
        with pytest.raises(ConfigurationError, match="max_retries"):
            ClientConfig(api_key="key", token="token", max_retries=0)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ConfigurationError, match="timeout"):
            ClientConfig(api_key="key", token="token", timeout=0)

    def test_config_is_immutable(self):
        config = ClientConfig(api_key="key", token="token")
        with pytest.raises(AttributeError):
            config.api_key = "other"  # type: ignore[misc]

    def test_repr_masks_credentials(self, config):
        text = repr(config)

        assert config.api_key not in text
        assert config.token not in text
        assert "test...cdef" in text


class TestFromEnv:
    def test_reads_environment(self, tmp_path):
        with patch.dict(
            "os.environ",
            {"TRELLO_API_KEY": "env-key", "TRELLO_TOKEN": "env-token"},
            clear=True,
        ):
            config = ClientConfig.from_env(str(tmp_path / "missing.env"))

        assert config.api_key == "env-key"
        assert config.token == "env-token"

    def test_overrides_are_applied(self, tmp_path):
        with patch.dict(
            "os.environ", {"TRELLO_API_KEY": "k", "TRELLO_TOKEN": "t"}, clear=True
        ):
            config = ClientConfig.from_env(str(tmp_path / "none"), timeout=5.0, max_retries=1)

        assert config.timeout == 5.0
        assert config.max_retries == 1

    def test_missing_credentials_name_the_variables(self, tmp_path):
        with patch.dict("os.environ", {"TRELLO_API_KEY": "k"}, clear=True):
            with pytest.raises(ConfigurationError, match="TRELLO_TOKEN") as exc_info:
                ClientConfig.from_env(str(tmp_path / "none"))

        assert "TRELLO_API_KEY," not in str(exc_info.value)

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# Trello credentials\nTRELLO_API_KEY=file-key\nTRELLO_TOKEN='file-token'\n"
        )

        with patch.dict("os.environ", {}, clear=True):
            config = ClientConfig.from_env(str(env_file))

        assert config.api_key == "file-key"
        assert config.token == "file-token"

    def test_environment_wins_over_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TRELLO_API_KEY=file-key\nTRELLO_TOKEN=file-token\n")

        with patch.dict("os.environ", {"TRELLO_API_KEY": "env-key"}, clear=True):
            config = ClientConfig.from_env(str(env_file))

        assert config.api_key == "env-key"
        assert config.token == "file-token"

    def test_env_file_from_variable(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("TRELLO_API_KEY=a\nTRELLO_TOKEN=b\nTRELLO_BOARD_ID=cHkkifBS\n")

        with patch.dict("os.environ", {"TRELLO_ENV_FILE": str(env_file)}, clear=True):
            values = load_environment()

        assert values["TRELLO_BOARD_ID"] == "cHkkifBS"

    def test_env_file_does_not_touch_os_environ(self, tmp_path):
        import os

        env_file = tmp_path / ".env"
        env_file.write_text("TRELLO_API_KEY=a\nTRELLO_TOKEN=b\n")

        with patch.dict("os.environ", {}, clear=True):
            ClientConfig.from_env(str(env_file))
            assert "TRELLO_API_KEY" not in os.environ


class TestHelpers:
    def test_read_missing_env_file(self, tmp_path):
        assert read_env_file(str(tmp_path / "nope")) == {}

    def test_read_env_file_skips_comments_and_blank_lines(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("\n# comment\nA=1\nnot a pair\nB = two=2\n")

        assert read_env_file(str(env_file)) == {"A": "1", "B": "two=2"}

    def test_mask_long_secret(self):
        assert mask_secret("abcdefghijklmnop") == "abcd...mnop"

    def test_mask_short_secret(self):
        assert mask_secret("short") == "<hidden>"


class TestBoardFromUrl:
    def test_with_explicit_config(self, config):
        board = board_from_url("https://trello.com/b/cHkkifBS/my-board", config)

        assert board.board_id == "cHkkifBS"
        assert isinstance(board.connection, TrelloConnection)
        assert board.connection.config is config

    def test_from_environment(self, tmp_path):
        with patch.dict(
            "os.environ",
            {
                "TRELLO_API_KEY": "k",
                "TRELLO_TOKEN": "t",
                "TRELLO_ENV_FILE": str(tmp_path / "none"),
            },
            clear=True,
        ):
            board = board_from_url("https://trello.com/b/cHkkifBS/my-board")

        assert board.connection.config.api_key == "k"

    def test_missing_credentials_fail_at_startup(self, tmp_path):
        with patch.dict("os.environ", {"TRELLO_ENV_FILE": str(tmp_path / "none")}, clear=True):
            with pytest.raises(ConfigurationError):
                board_from_url("https://trello.com/b/cHkkifBS/my-board")
