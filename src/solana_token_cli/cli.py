from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import httpx

from .config import Settings
from .errors import Cancelled, TokenCliError
from .funding import await_funding
from .interview import choose_network, collect_token_params, confirm_params
from .issuer import TokenIssuer
from .metadata import publish
from .project_constants import MIN_BALANCE_LAMPORTS, WALLET_FILE
from .prompts import Prompter
from .report import print_receipt
from .rpc import RpcClient
from .wallet import ensure_wallet

log = logging.getLogger("create")


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def run(settings: Settings, prompter: Prompter, wallet_path: str = WALLET_FILE) -> int:
    prompter.say("Welcome to the Solana Token CLI! 🚀")
    prompter.say("Follow the steps to create your fungible token.")
    prompter.say()

    network = choose_network(prompter)
    log.info("Using RPC endpoint: %s", network.rpc_url)

    rpc = RpcClient(network.rpc_url, timeout_s=settings.rpc_timeout_s)
    try:
        payer = ensure_wallet(wallet_path)
        address = str(payer.pubkey())
        await_funding(
            rpc,
            address,
            MIN_BALANCE_LAMPORTS,
            pause=lambda _addr: prompter.pause(
                "Press Enter once you have funded the wallet (q to quit)..."
            ),
        )

        params = collect_token_params(prompter)
        confirm_params(prompter, network, params)

        log.info("Step 8: Uploading image and metadata to IPFS...")
        with httpx.Client(timeout=settings.rpc_timeout_s) as http:
            uri = publish(
                params.image_path,
                params.name,
                params.symbol,
                params.description,
                params.twitter,
                params.website,
                client=http,
            )
        log.info("Metadata uploaded successfully! IPFS Metadata URI: %s", uri)

        issuer = TokenIssuer(rpc, payer, confirm_timeout_s=settings.confirm_timeout_s)
        receipt = issuer.issue(params, uri)
    finally:
        rpc.close()

    print_receipt(receipt, network, out=prompter.say)
    return 0


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="solana-token-cli",
        description=(
            "Interactively create a fungible SPL token with Metaplex metadata. "
            "Settings are read from the environment or a .env file: "
            "TOKEN_CLI_RPC_TIMEOUT, TOKEN_CLI_CONFIRM_TIMEOUT, TOKEN_CLI_VERBOSE."
        ),
    )


def _main(prompter: Prompter) -> int:
    try:
        settings = Settings.from_env()
        setup_logging(settings.verbose)
        return run(settings, prompter)
    except Cancelled as e:
        prompter.say(f"{e} 💩")
        return 0
    except TokenCliError as e:
        log.error("❌ %s", e)
        return 1


def main(argv: Optional[List[str]] = None) -> None:
    build_parser().parse_args(argv)
    raise SystemExit(_main(Prompter()))
