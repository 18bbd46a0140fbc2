"""Shared fixtures: scripted prompts and a stand-in RPC client."""
from typing import List
from unittest.mock import MagicMock

import pytest
from solders.hash import Hash

from solana_token_cli.prompts import Prompter
from solana_token_cli.rpc import RpcClient


class ScriptedPrompter(Prompter):
    """Prompter fed from a fixed list of answers; records every line shown."""

    def __init__(self, answers: List[str]) -> None:
        self.answers = list(answers)
        self.labels: List[str] = []
        self.output: List[str] = []
        super().__init__(input_fn=self._next, output_fn=self.output.append)

    def _next(self, label: str) -> str:
        self.labels.append(label)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def scripted():
    return ScriptedPrompter


@pytest.fixture
def rpc():
    client = MagicMock(spec=RpcClient)
    client.get_balance.return_value = 10**9
    client.get_minimum_balance_for_rent_exemption.return_value = 1_461_600
    client.get_latest_blockhash.return_value = str(Hash.default())
    client.send_transaction.side_effect = ["sig-main", "sig-mint-auth", "sig-freeze-auth"]
    return client


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "token.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return str(path)
