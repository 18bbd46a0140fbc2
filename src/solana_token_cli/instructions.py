from __future__ import annotations

from typing import List

from borsh_construct import U8, U16, U64, Bool, CStruct, Enum, Option, String, Vec
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.system_program import CreateAccountParams, create_account
from spl.token.constants import ASSOCIATED_TOKEN_PROGRAM_ID, TOKEN_PROGRAM_ID
from spl.token.instructions import (
    AuthorityType,
    InitializeMintParams,
    MintToParams,
    SetAuthorityParams,
    get_associated_token_address,
    initialize_mint,
    mint_to,
    set_authority,
)

from .project_constants import MINT_ACCOUNT_SIZE, TOKEN_METADATA_PROGRAM_ID

METADATA_PROGRAM_ID = Pubkey.from_string(TOKEN_METADATA_PROGRAM_ID)

CREATE_METADATA_ACCOUNT_V3 = 33
ATA_CREATE_IDEMPOTENT = 1

# Token Metadata program: CreateMetadataAccountV3 instruction data
CREATE_METADATA_V3_LAYOUT = CStruct(
    "instructionDiscriminator" / U8,
    "createMetadataAccountArgsV3" / CStruct(
        "data" / CStruct(
            "name" / String,
            "symbol" / String,
            "uri" / String,
            "sellerFeeBasisPoints" / U16,
            "creators" / Option(Vec(CStruct(
                "address" / U8[32],
                "verified" / Bool,
                "share" / U8,
            ))),
            "collection" / Option(CStruct(
                "verified" / Bool,
                "key" / U8[32],
            )),
            "uses" / Option(CStruct(
                "useMethod" / Enum("Burn", "Multiple", "Single", enum_name="UseMethod"),
                "remaining" / U64,
                "total" / U64,
            )),
        ),
        "isMutable" / Bool,
        "collectionDetails" / Option(Enum("V1" / CStruct("size" / U64), enum_name="CollectionDetails")),
    ),
)


def find_metadata_pda(mint: Pubkey) -> Pubkey:
    pda, _ = Pubkey.find_program_address(
        [b"metadata", bytes(METADATA_PROGRAM_ID), bytes(mint)],
        METADATA_PROGRAM_ID,
    )
    return pda


def create_metadata_v3(
    mint: Pubkey,
    authority: Pubkey,
    name: str,
    symbol: str,
    uri: str,
    is_mutable: bool,
) -> Instruction:
    """Metadata account for ``mint`` with ``authority`` as payer, update authority and sole creator."""
    data = CREATE_METADATA_V3_LAYOUT.build({
        "instructionDiscriminator": CREATE_METADATA_ACCOUNT_V3,
        "createMetadataAccountArgsV3": {
            "data": {
                "name": name,
                "symbol": symbol,
                "uri": uri,
                "sellerFeeBasisPoints": 0,
                "creators": [
                    {"address": list(bytes(authority)), "verified": True, "share": 100},
                ],
                "collection": None,
                "uses": None,
            },
            "isMutable": is_mutable,
            "collectionDetails": None,
        },
    })
    accounts = [
        AccountMeta(pubkey=find_metadata_pda(mint), is_signer=False, is_writable=True),
        AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=authority, is_signer=True, is_writable=False),  # mint authority
        AccountMeta(pubkey=authority, is_signer=True, is_writable=True),  # payer
        AccountMeta(pubkey=authority, is_signer=True, is_writable=False),  # update authority
        AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(METADATA_PROGRAM_ID, data, accounts)


def create_fungible(
    mint: Pubkey,
    authority: Pubkey,
    rent_lamports: int,
    decimals: int,
    name: str,
    symbol: str,
    uri: str,
    is_mutable: bool,
) -> List[Instruction]:
    """Allocate and initialize the mint, then attach its metadata account."""
    return [
        create_account(
            CreateAccountParams(
                from_pubkey=authority,
                to_pubkey=mint,
                lamports=rent_lamports,
                space=MINT_ACCOUNT_SIZE,
                owner=TOKEN_PROGRAM_ID,
            )
        ),
        initialize_mint(
            InitializeMintParams(
                decimals=decimals,
                program_id=TOKEN_PROGRAM_ID,
                mint=mint,
                mint_authority=authority,
                freeze_authority=authority,
            )
        ),
        create_metadata_v3(mint, authority, name, symbol, uri, is_mutable),
    ]


def create_associated_account_if_missing(payer: Pubkey, owner: Pubkey, mint: Pubkey) -> Instruction:
    ata = get_associated_token_address(owner, mint)
    return Instruction(
        ASSOCIATED_TOKEN_PROGRAM_ID,
        bytes([ATA_CREATE_IDEMPOTENT]),
        [
            AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
            AccountMeta(pubkey=ata, is_signer=False, is_writable=True),
            AccountMeta(pubkey=owner, is_signer=False, is_writable=False),
            AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
            AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            AccountMeta(pubkey=TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        ],
    )


def mint_to_owner(mint: Pubkey, owner: Pubkey, amount: int) -> Instruction:
    return mint_to(
        MintToParams(
            program_id=TOKEN_PROGRAM_ID,
            mint=mint,
            dest=get_associated_token_address(owner, mint),
            mint_authority=owner,
            amount=amount,
        )
    )


def revoke_authority(mint: Pubkey, current_authority: Pubkey, authority_type: AuthorityType) -> Instruction:
    return set_authority(
        SetAuthorityParams(
            program_id=TOKEN_PROGRAM_ID,
            account=mint,
            authority=authority_type,
            current_authority=current_authority,
            new_authority=None,
        )
    )
