import pytest

from solana_token_cli.config import Settings
from solana_token_cli.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("TOKEN_CLI_RPC_TIMEOUT", "TOKEN_CLI_CONFIRM_TIMEOUT", "TOKEN_CLI_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        assert Settings.from_env() == Settings(rpc_timeout_s=60.0, confirm_timeout_s=90.0, verbose=False)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TOKEN_CLI_RPC_TIMEOUT", "5")
        monkeypatch.setenv("TOKEN_CLI_CONFIRM_TIMEOUT", "30.5")
        monkeypatch.setenv("TOKEN_CLI_VERBOSE", "yes")
        assert Settings.from_env() == Settings(rpc_timeout_s=5.0, confirm_timeout_s=30.5, verbose=True)

    @pytest.mark.parametrize("value", ["abc", "0", "-1"])
    def test_bad_timeout(self, monkeypatch, value):
        monkeypatch.setenv("TOKEN_CLI_RPC_TIMEOUT", value)
        with pytest.raises(ConfigError):
            Settings.from_env()
