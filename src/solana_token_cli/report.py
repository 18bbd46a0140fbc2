from __future__ import annotations

from typing import Callable

from .interview import Network
from .issuer import Receipt
from .project_constants import EXPLORER_URL


def explorer_link(kind: str, value: str, network: Network) -> str:
    suffix = "?cluster=devnet" if network.is_devnet else ""
    return f"{EXPLORER_URL}/{kind}/{value}{suffix}"


def print_receipt(receipt: Receipt, network: Network, out: Callable[[str], None] = print) -> None:
    out("")
    out("========================================")
    out("🎉 Transaction Complete!")
    out("========================================")
    out("View Transaction:")
    out(explorer_link("tx", receipt.signature, network))
    out("View Token:")
    out(explorer_link("token", receipt.mint, network))
    out("----------------------------------------")
    out(f"Token Address : {receipt.mint}")
    out(f"Signature     : {receipt.signature}")
    out(f"Metadata URI  : {receipt.metadata_uri}")
    if receipt.mint_authority_signature:
        out(f"Disabled mint auth  : {explorer_link('tx', receipt.mint_authority_signature, network)}")
    if receipt.freeze_authority_signature:
        out(f"Disabled freeze auth: {explorer_link('tx', receipt.freeze_authority_signature, network)}")
    for err in receipt.revocation_errors:
        out(f"⚠️ {err.authority} authority is still active: {err.cause}")
    out("----------------------------------------")
    out("✅ Token creation completed successfully.")
