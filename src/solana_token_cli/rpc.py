from __future__ import annotations

import base64
import logging
import time
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx

from .errors import RpcError
from .project_constants import CONFIRM_POLL_INTERVAL_S

log = logging.getLogger(__name__)

T = TypeVar("T")


def _signature(result: Any) -> str:
    if not isinstance(result, str) or not result:
        raise TypeError("expected a signature string")
    return result


def _statuses(result: Any) -> List[Optional[Dict[str, Any]]]:
    value = result["value"]
    if not isinstance(value, list) or not all(s is None or isinstance(s, dict) for s in value):
        raise TypeError("expected a list of status objects")
    return value


class RpcClient:
    def __init__(
        self,
        rpc_url: str,
        timeout_s: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.client = httpx.Client(timeout=timeout_s, transport=transport)

    def close(self) -> None:
        self.client.close()

    def _post(self, method: str, params: List[Any]) -> Dict[str, Any]:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }
        log.debug("RPC %s %s", method, params)
        try:
            resp = self.client.post(self.rpc_url, json=payload)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise RpcError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise RpcError(f"{method} returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise RpcError(f"{method} returned a non-object response: {data!r}")
        if "error" in data:
            raise RpcError(f"RPC error from {method}: {data['error']}")
        return data

    def _call(self, method: str, params: List[Any], extract: Callable[[Any], T]) -> T:
        """Runs ``method`` and applies ``extract`` to its ``result``; a malformed result raises RpcError."""
        result = self._post(method, params).get("result")
        try:
            return extract(result)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise RpcError(f"{method} returned an unexpected result: {result!r}") from e

    def get_balance(self, pubkey: str, commitment: str = "confirmed") -> int:
        """Returns the balance of ``pubkey`` in lamports."""
        return self._call(
            "getBalance", [pubkey, {"commitment": commitment}], lambda r: int(r["value"])
        )

    def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        return self._call("getMinimumBalanceForRentExemption", [size], int)

    def get_latest_blockhash(self, commitment: str = "confirmed") -> str:
        return self._call(
            "getLatestBlockhash", [{"commitment": commitment}], lambda r: str(r["value"]["blockhash"])
        )

    def send_transaction(self, raw_tx: bytes) -> str:
        """Submits a signed, serialized transaction and returns its signature."""
        encoded = base64.b64encode(raw_tx).decode("ascii")
        return self._call(
            "sendTransaction",
            [encoded, {"encoding": "base64", "preflightCommitment": "confirmed"}],
            _signature,
        )

    def get_signature_statuses(self, signatures: List[str]) -> List[Optional[Dict[str, Any]]]:
        return self._call(
            "getSignatureStatuses",
            [signatures, {"searchTransactionHistory": False}],
            _statuses,
        )

    def confirm_transaction(
        self,
        signature: str,
        timeout_s: float,
        poll_interval_s: float = CONFIRM_POLL_INTERVAL_S,
    ) -> None:
        """
        Blocks until ``signature`` reaches confirmed (or finalized) commitment.

        Polls the status only; the transaction is never re-sent. Raises
        RpcError if the transaction failed on chain or the deadline passes.
        """
        deadline = time.monotonic() + timeout_s
        while True:
            statuses = self.get_signature_statuses([signature])
            status = statuses[0] if statuses else None
            if status is not None:
                if status.get("err") is not None:
                    raise RpcError(f"Transaction {signature} failed: {status['err']}")
                if status.get("confirmationStatus") in ("confirmed", "finalized"):
                    return
            if time.monotonic() >= deadline:
                raise RpcError(
                    f"Transaction {signature} not confirmed after {timeout_s:.0f}s"
                )
            time.sleep(poll_interval_s)
