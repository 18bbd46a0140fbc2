from solana_token_cli.errors import AuthorityRevocationError, RpcError
from solana_token_cli.interview import DEVNET, MAINNET, Network
from solana_token_cli.issuer import Receipt
from solana_token_cli.report import explorer_link, print_receipt


class TestExplorerLinks:
    def test_devnet_suffix(self):
        assert explorer_link("tx", "abc", DEVNET) == "https://solscan.io/tx/abc?cluster=devnet"

    def test_mainnet_and_custom_have_no_suffix(self):
        assert explorer_link("token", "abc", MAINNET) == "https://solscan.io/token/abc"
        custom = Network("custom", "https://rpc.example.com")
        assert explorer_link("token", "abc", custom) == "https://solscan.io/token/abc"


class TestPrintReceipt:
    def test_lists_links_and_revocations(self):
        lines = []
        receipt = Receipt(
            signature="sig-main",
            mint="MintAddr",
            metadata_uri="https://ipfs/meta",
            mint_authority_signature="sig-mint-auth",
        )
        print_receipt(receipt, DEVNET, out=lines.append)
        text = "\n".join(lines)

        assert "https://solscan.io/tx/sig-main?cluster=devnet" in text
        assert "https://solscan.io/token/MintAddr?cluster=devnet" in text
        assert "https://solscan.io/tx/sig-mint-auth?cluster=devnet" in text
        assert "Disabled freeze auth" not in text

    def test_failed_revocation_is_reported_as_still_active(self):
        lines = []
        receipt = Receipt(
            signature="sig-main",
            mint="MintAddr",
            metadata_uri="https://ipfs/meta",
            mint_authority_signature="sig-mint-auth",
            revocation_errors=[AuthorityRevocationError("freeze", RpcError("rejected"))],
        )
        print_receipt(receipt, MAINNET, out=lines.append)
        text = "\n".join(lines)

        assert "freeze authority is still active: rejected" in text
        assert "Disabled freeze auth" not in text
        assert "Disabled mint auth  : https://solscan.io/tx/sig-mint-auth" in text
