from __future__ import annotations

import logging
from typing import Callable

from .errors import Cancelled, FundingError
from .project_constants import LAMPORTS_PER_SOL
from .rpc import RpcClient

log = logging.getLogger(__name__)


def to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


def await_funding(
    rpc: RpcClient,
    address: str,
    minimum_lamports: int,
    pause: Callable[[str], bool],
) -> int:
    """
    Make sure ``address`` holds at least ``minimum_lamports``.

    If the first balance check falls short, ``pause(address)`` is called once
    and blocks until the operator answers: True resumes, False cancels the
    run. The balance is checked again exactly once afterwards.
    """
    balance = rpc.get_balance(address)
    log.info("Current wallet balance: %s SOL", to_sol(balance))
    if balance >= minimum_lamports:
        return balance

    log.warning(
        "Wallet balance is low. Send at least %s SOL to: %s",
        to_sol(minimum_lamports),
        address,
    )
    if not pause(address):
        raise Cancelled("Funding aborted by operator.")

    balance = rpc.get_balance(address)
    log.info("Current wallet balance: %s SOL", to_sol(balance))
    if balance < minimum_lamports:
        raise FundingError(
            f"Insufficient balance: {to_sol(balance)} SOL < {to_sol(minimum_lamports)} SOL. "
            "Fund the wallet and run again."
        )
    return balance
