from __future__ import annotations

import json
import logging
import os

from solders.keypair import Keypair

from .errors import WalletError

log = logging.getLogger(__name__)


def ensure_wallet(path: str) -> Keypair:
    """
    Load the wallet at ``path``, or generate and save one if it is missing.

    The file holds the 64 secret-key bytes as a JSON array of ints. An
    existing file is never rewritten.
    """
    if not os.path.exists(path):
        keypair = Keypair()
        # O_EXCL refuses to clobber a file created since the exists() check
        try:
            fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(list(bytes(keypair)), f)
        except OSError as e:
            raise WalletError(f"Cannot create wallet file {path}: {e}") from e
        log.info("Created new wallet: %s", path)
        log.info("Public key: %s", keypair.pubkey())
        return keypair

    log.info("Using existing wallet: %s", path)
    return load_keypair(path)


def load_keypair(path: str) -> Keypair:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise WalletError(f"Cannot read wallet file {path}: {e}") from e
    except ValueError as e:
        raise WalletError(f"Wallet file {path} is not valid JSON: {e}") from e

    if not isinstance(raw, list) or len(raw) != 64 or not all(
        isinstance(b, int) and 0 <= b <= 255 for b in raw
    ):
        raise WalletError(f"Wallet file {path} must contain a JSON array of 64 bytes.")

    try:
        return Keypair.from_bytes(bytes(raw))
    except ValueError as e:
        raise WalletError(f"Wallet file {path} does not hold a valid keypair: {e}") from e
