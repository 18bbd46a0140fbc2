from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .errors import Cancelled, ValidationError
from .project_constants import (
    DEVNET_RPC_URL,
    MAINNET_RPC_URL,
    MAX_DECIMALS,
    MAX_NAME_LENGTH,
    MAX_SYMBOL_LENGTH,
    MAX_U64,
)
from .prompts import Prompter


@dataclass(frozen=True)
class Network:
    name: str
    rpc_url: str

    @property
    def is_devnet(self) -> bool:
        return self.rpc_url == DEVNET_RPC_URL


DEVNET = Network("devnet", DEVNET_RPC_URL)
MAINNET = Network("mainnet", MAINNET_RPC_URL)


@dataclass(frozen=True)
class TokenParams:
    name: str
    symbol: str
    decimals: int
    supply: Decimal
    image_path: str
    description: str = ""
    twitter: str = ""
    website: str = ""
    disable_mint_authority: bool = True
    disable_freeze_authority: bool = True
    disable_update_authority: bool = True

    @property
    def amount(self) -> int:
        return base_units(self.supply, self.decimals)


def base_units(supply: Decimal, decimals: int) -> int:
    """floor(supply * 10**decimals), exact. Raises ValidationError past u64."""
    if decimals < 0:
        raise ValidationError("Decimals must be a non-negative integer!")
    if supply < 0:
        raise ValidationError("Supply must be a positive number!")
    # Integer arithmetic on the digits; Decimal multiplication would round at 28 digits
    _, digits, exponent = Decimal(supply).as_tuple()
    coefficient = int("".join(map(str, digits)) or "0")
    shift = exponent + decimals
    if coefficient and len(str(coefficient)) + shift > len(str(MAX_U64)):
        amount = MAX_U64 + 1
    elif coefficient == 0 or len(str(coefficient)) + shift <= 0:
        amount = 0
    elif shift >= 0:
        amount = coefficient * 10**shift
    else:
        amount = coefficient // 10**-shift
    if amount > MAX_U64:
        raise ValidationError(
            f"Supply x 10^{decimals} does not fit in a u64 token amount (max {MAX_U64})."
        )
    return amount


# Validators take the raw answer and return the parsed value.

def validate_rpc_url(value: str) -> str:
    value = value.strip()
    if not value.startswith("http"):
        raise ValidationError("Please enter a valid URL starting with http or https!")
    return value


def _validate_label(value: str, field: str, max_bytes: int) -> str:
    value = value.strip()
    if not value:
        raise ValidationError(f"Token {field} cannot be empty!")
    if len(value.encode("utf-8")) > max_bytes:
        raise ValidationError(f"Token {field} must be at most {max_bytes} bytes.")
    return value


def validate_name(value: str) -> str:
    return _validate_label(value, "name", MAX_NAME_LENGTH)


def validate_symbol(value: str) -> str:
    return _validate_label(value, "symbol", MAX_SYMBOL_LENGTH)


def validate_decimals(value: str) -> int:
    try:
        num = int(value.strip())
    except ValueError:
        raise ValidationError("Decimals must be a non-negative integer!")
    if num < 0 or num > MAX_DECIMALS:
        raise ValidationError(f"Decimals must be an integer between 0 and {MAX_DECIMALS}!")
    return num


def parse_supply(value: str) -> Decimal:
    try:
        num = Decimal(value.strip())
    except InvalidOperation:
        raise ValidationError("Supply must be a positive number!")
    if not num.is_finite() or num <= 0:
        raise ValidationError("Supply must be a positive number!")
    return num


def supply_validator(decimals: int):
    def _validate(value: str) -> Decimal:
        supply = parse_supply(value)
        if base_units(supply, decimals) < 1:
            raise ValidationError(
                f"Supply is smaller than one base unit at {decimals} decimals!"
            )
        return supply

    return _validate


def validate_image_path(value: str) -> str:
    value = value.strip()
    if not value or not os.path.isfile(value):
        raise ValidationError("File does not exist! Please provide a valid file path.")
    return value


def choose_network(prompter: Prompter) -> Network:
    choice = prompter.choice(
        "Step 1: Select the Solana RPC endpoint:",
        [
            (f"Devnet ({DEVNET_RPC_URL})", DEVNET),
            (f"Mainnet ({MAINNET_RPC_URL})", MAINNET),
            ("Custom RPC URL", None),
        ],
    )
    if choice is not None:
        return choice
    url = prompter.text(
        "Enter your custom RPC URL (e.g., https://your-rpc-url.com)",
        validate=validate_rpc_url,
    )
    return Network("custom", url)


def collect_token_params(prompter: Prompter) -> TokenParams:
    name = prompter.text("Step 2: Enter the token name (e.g., My Token)", validate=validate_name)
    symbol = prompter.text("Step 3: Enter the token symbol (e.g., MTK)", validate=validate_symbol)
    decimals = prompter.text(
        "Step 4: Enter the number of decimal places", default="6", validate=validate_decimals
    )
    supply = prompter.text(
        "Step 5: Enter the total token supply",
        default="1000000000",
        validate=supply_validator(decimals),
    )
    image_path = prompter.text(
        "Step 6: Enter the path to your token image file (e.g., token.jpg)",
        validate=validate_image_path,
    )
    description = prompter.text("Step 7: Enter a description for your token (optional)").strip()
    twitter = prompter.text(
        "Step 8: Enter a Twitter link (optional, e.g., https://x.com/handle)"
    ).strip()
    website = prompter.text(
        "Step 9: Enter a website URL (optional, e.g., https://example.com)"
    ).strip()

    return TokenParams(
        name=name,
        symbol=symbol,
        decimals=decimals,
        supply=supply,
        image_path=image_path,
        description=description,
        twitter=twitter,
        website=website,
        disable_mint_authority=prompter.confirm(
            "Step 10: Disable mint authority? (Prevents further minting)"
        ),
        disable_freeze_authority=prompter.confirm(
            "Step 11: Disable freeze authority? (Prevents freezing accounts)"
        ),
        disable_update_authority=prompter.confirm(
            "Step 12: Disable update authority? (Prevents metadata updates)"
        ),
    )


def confirm_params(prompter: Prompter, network: Network, params: TokenParams) -> None:
    """Show the collected answers; raise Cancelled unless the operator agrees."""
    prompter.say()
    prompter.say("Token creation details:")
    prompter.say(f"RPC URL                 : {network.rpc_url}")
    prompter.say(f"Name                    : {params.name}")
    prompter.say(f"Symbol                  : {params.symbol}")
    prompter.say(f"Decimals                : {params.decimals}")
    prompter.say(f"Supply                  : {params.supply}")
    prompter.say(f"Image Path              : {params.image_path}")
    prompter.say(f"Description             : {params.description or 'None'}")
    prompter.say(f"Twitter                 : {params.twitter or 'None'}")
    prompter.say(f"Website                 : {params.website or 'None'}")
    prompter.say(f"Disable Mint Authority  : {params.disable_mint_authority}")
    prompter.say(f"Disable Freeze Authority: {params.disable_freeze_authority}")
    prompter.say(f"Disable Update Authority: {params.disable_update_authority}")
    prompter.say()

    if not prompter.confirm("Ready to upload the image/metadata and create the token?"):
        raise Cancelled("Token creation cancelled.")
