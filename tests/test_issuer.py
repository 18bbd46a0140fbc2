from decimal import Decimal

import pytest
from solders.keypair import Keypair
from spl.token.instructions import AuthorityType

from solana_token_cli import issuer as issuer_module
from solana_token_cli.errors import AuthorityRevocationError, IssuanceError, RpcError
from solana_token_cli.interview import TokenParams
from solana_token_cli.issuer import TokenIssuer


@pytest.fixture
def payer():
    return Keypair()


def make_params(image, **overrides):
    values = dict(
        name="My Token",
        symbol="MTK",
        decimals=6,
        supply=Decimal("1000000000"),
        image_path=image,
        disable_mint_authority=False,
        disable_freeze_authority=False,
        disable_update_authority=False,
    )
    values.update(overrides)
    return TokenParams(**values)


@pytest.fixture
def recorded(monkeypatch):
    calls = {"mint_to": [], "revoke": []}
    real_mint_to = issuer_module.mint_to_owner
    real_revoke = issuer_module.revoke_authority

    def mint_to(mint, owner, amount):
        calls["mint_to"].append((mint, owner, amount))
        return real_mint_to(mint, owner, amount)

    def revoke(mint, authority, authority_type):
        calls["revoke"].append((mint, authority, authority_type))
        return real_revoke(mint, authority, authority_type)

    monkeypatch.setattr(issuer_module, "mint_to_owner", mint_to)
    monkeypatch.setattr(issuer_module, "revoke_authority", revoke)
    return calls


class TestIssue:
    def test_single_bundle_without_revocations(self, rpc, payer, image, recorded):
        receipt = TokenIssuer(rpc, payer).issue(make_params(image), "https://ipfs/meta")

        assert receipt.signature == "sig-main"
        assert receipt.metadata_uri == "https://ipfs/meta"
        assert receipt.mint_authority_signature is None
        assert receipt.freeze_authority_signature is None
        assert receipt.revocation_errors == []
        rpc.send_transaction.assert_called_once()
        rpc.confirm_transaction.assert_called_once_with("sig-main", timeout_s=90.0)
        assert recorded["revoke"] == []

    def test_mints_full_supply_in_base_units(self, rpc, payer, image, recorded):
        receipt = TokenIssuer(rpc, payer).issue(make_params(image), "uri")

        [(mint, owner, amount)] = recorded["mint_to"]
        assert amount == 1_000_000_000_000_000
        assert owner == payer.pubkey()
        assert str(mint) == receipt.mint

    def test_mint_revocation_has_its_own_signature(self, rpc, payer, image, recorded):
        params = make_params(image, disable_mint_authority=True)
        receipt = TokenIssuer(rpc, payer).issue(params, "uri")

        assert receipt.signature == "sig-main"
        assert receipt.mint_authority_signature == "sig-mint-auth"
        assert receipt.mint_authority_signature != receipt.signature
        [(mint, authority, kind)] = recorded["revoke"]
        assert str(mint) == receipt.mint
        assert authority == payer.pubkey()
        assert kind == AuthorityType.MINT_TOKENS

    def test_both_revocations_use_the_same_mint(self, rpc, payer, image, recorded):
        params = make_params(image, disable_mint_authority=True, disable_freeze_authority=True)
        receipt = TokenIssuer(rpc, payer).issue(params, "uri")

        assert receipt.freeze_authority_signature == "sig-freeze-auth"
        assert [kind for _, _, kind in recorded["revoke"]] == [
            AuthorityType.MINT_TOKENS,
            AuthorityType.FREEZE_ACCOUNT,
        ]
        mints = {str(m) for m, _, _ in recorded["mint_to"]} | {str(m) for m, _, _ in recorded["revoke"]}
        assert mints == {receipt.mint}

    def test_main_bundle_failure_is_fatal(self, rpc, payer, image):
        rpc.send_transaction.side_effect = RpcError("blockhash not found")
        params = make_params(image, disable_mint_authority=True)

        with pytest.raises(IssuanceError, match="blockhash not found"):
            TokenIssuer(rpc, payer).issue(params, "uri")
        rpc.send_transaction.assert_called_once()
        rpc.confirm_transaction.assert_not_called()

    def test_unconfirmed_bundle_is_fatal(self, rpc, payer, image):
        rpc.confirm_transaction.side_effect = RpcError("not confirmed")

        with pytest.raises(IssuanceError):
            TokenIssuer(rpc, payer).issue(make_params(image), "uri")

    def test_revocation_failure_is_recorded_not_raised(self, rpc, payer, image):
        rpc.send_transaction.side_effect = ["sig-main", RpcError("rejected"), "sig-freeze-auth"]
        params = make_params(image, disable_mint_authority=True, disable_freeze_authority=True)

        receipt = TokenIssuer(rpc, payer).issue(params, "uri")

        assert receipt.signature == "sig-main"
        assert receipt.mint_authority_signature is None
        assert receipt.freeze_authority_signature == "sig-freeze-auth"
        [err] = receipt.revocation_errors
        assert isinstance(err, AuthorityRevocationError)
        assert err.authority == "mint"

    def test_malformed_revocation_reply_stays_non_fatal(self, rpc, payer, image):
        rpc.get_latest_blockhash.side_effect = [rpc.get_latest_blockhash.return_value, "not-a-hash"]
        params = make_params(image, disable_mint_authority=True)

        receipt = TokenIssuer(rpc, payer).issue(params, "uri")

        assert receipt.signature == "sig-main"
        assert receipt.mint_authority_signature is None
        [err] = receipt.revocation_errors
        assert isinstance(err.cause, RpcError)
