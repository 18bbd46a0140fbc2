from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction
from spl.token.instructions import AuthorityType

from .errors import AuthorityRevocationError, IssuanceError, RpcError, TokenCliError
from .instructions import (
    create_associated_account_if_missing,
    create_fungible,
    mint_to_owner,
    revoke_authority,
)
from .interview import TokenParams
from .project_constants import MINT_ACCOUNT_SIZE
from .rpc import RpcClient

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Receipt:
    signature: str
    mint: str
    metadata_uri: str
    mint_authority_signature: Optional[str] = None
    freeze_authority_signature: Optional[str] = None
    revocation_errors: List[AuthorityRevocationError] = field(default_factory=list)


class TokenIssuer:
    """
    Creates the token on chain with the operator's wallet as payer and authority.

    The create + mint bundle is all-or-nothing and any failure there raises
    IssuanceError. Authority revocations run afterwards as independent
    transactions; the token already exists by then, so a failed revocation
    is logged and recorded on the receipt instead of aborting the run.
    """

    def __init__(self, rpc: RpcClient, payer: Keypair, confirm_timeout_s: float = 90.0) -> None:
        self.rpc = rpc
        self.payer = payer
        self.confirm_timeout_s = confirm_timeout_s

    def issue(self, params: TokenParams, metadata_uri: str) -> Receipt:
        owner = self.payer.pubkey()
        mint_keypair = Keypair()
        mint = mint_keypair.pubkey()
        # Not persisted: if the run dies before confirmation this address is all that is left
        log.info("Mint address: %s", mint)

        try:
            log.info("Step 9: Creating token instructions...")
            amount = params.amount
            rent = self.rpc.get_minimum_balance_for_rent_exemption(MINT_ACCOUNT_SIZE)
            instructions = create_fungible(
                mint=mint,
                authority=owner,
                rent_lamports=rent,
                decimals=params.decimals,
                name=params.name,
                symbol=params.symbol,
                uri=metadata_uri,
                is_mutable=not params.disable_update_authority,
            )
            instructions.append(create_associated_account_if_missing(owner, owner, mint))
            instructions.append(mint_to_owner(mint, owner, amount))

            log.info("Step 10: Sending transaction...")
            signature = self._send(instructions, [self.payer, mint_keypair])
        except TokenCliError as e:
            raise IssuanceError(f"Error creating token: {e}") from e
        log.info("Token created. Signature: %s", signature)

        errors: List[AuthorityRevocationError] = []
        mint_auth_sig = None
        freeze_auth_sig = None

        if params.disable_mint_authority:
            log.info("Step 11: Disabling mint authority...")
            mint_auth_sig = self._revoke(mint, AuthorityType.MINT_TOKENS, "mint", errors)

        if params.disable_freeze_authority:
            log.info("Step 12: Disabling freeze authority...")
            freeze_auth_sig = self._revoke(mint, AuthorityType.FREEZE_ACCOUNT, "freeze", errors)

        return Receipt(
            signature=signature,
            mint=str(mint),
            metadata_uri=metadata_uri,
            mint_authority_signature=mint_auth_sig,
            freeze_authority_signature=freeze_auth_sig,
            revocation_errors=errors,
        )

    def _revoke(
        self,
        mint: Pubkey,
        authority_type: AuthorityType,
        label: str,
        errors: List[AuthorityRevocationError],
    ) -> Optional[str]:
        try:
            ix = revoke_authority(mint, self.payer.pubkey(), authority_type)
            return self._send([ix], [self.payer])
        except TokenCliError as e:
            err = AuthorityRevocationError(label, e)
            log.warning("%s", err)
            errors.append(err)
            return None

    def _send(self, instructions: Sequence[Instruction], signers: Sequence[Keypair]) -> str:
        raw_blockhash = self.rpc.get_latest_blockhash()
        try:
            blockhash = Hash.from_string(raw_blockhash)
        except ValueError as e:
            raise RpcError(f"Invalid blockhash {raw_blockhash!r}: {e}") from e
        message = Message.new_with_blockhash(list(instructions), self.payer.pubkey(), blockhash)
        tx = Transaction(list(signers), message, blockhash)
        signature = self.rpc.send_transaction(bytes(tx))
        log.debug("Submitted %s, waiting for confirmation", signature)
        self.rpc.confirm_transaction(signature, timeout_s=self.confirm_timeout_s)
        return signature
