"""
Error taxonomy for the token creation workflow.

Everything except ``ValidationError`` and ``AuthorityRevocationError`` ends
the run: ``cli.main`` maps ``Cancelled`` to exit code 0 and every other
``TokenCliError`` to exit code 1.
"""
from __future__ import annotations


class TokenCliError(RuntimeError):
    """Base class for all errors raised by this tool."""


class ConfigError(TokenCliError):
    """Invalid value in the environment or .env file."""


class ValidationError(TokenCliError):
    """Bad interview input. The prompter re-asks the same field."""


class WalletError(TokenCliError):
    """The wallet file exists but cannot be turned into a keypair."""


class RpcError(TokenCliError):
    """HTTP failure or JSON-RPC error object from the RPC endpoint."""


class FundingError(TokenCliError):
    """Wallet still below the minimum balance after the funding pause."""


class UploadError(TokenCliError):
    """Image/metadata upload failed or returned no metadata URI."""


class IssuanceError(TokenCliError):
    """The create + mint transaction could not be submitted or confirmed."""


class AuthorityRevocationError(TokenCliError):
    """A mint or freeze authority revocation transaction failed."""

    def __init__(self, authority: str, cause: Exception) -> None:
        super().__init__(f"Failed to disable {authority} authority: {cause}")
        self.authority = authority
        self.cause = cause


class Cancelled(TokenCliError):
    """The operator declined the confirmation or aborted a prompt."""
