"""
Fixed parameters of the token creation workflow.

These values are not configurable at runtime: the funding threshold, the
upload endpoint and the program IDs define what the tool does on chain.
"""

# Public RPC endpoints offered in the network prompt
DEVNET_RPC_URL = "https://api.devnet.solana.com"
MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"

# Local wallet, relative to the working directory
WALLET_FILE = "wallet.json"

LAMPORTS_PER_SOL = 10**9

# Minimum wallet balance before the interview continues (0.1 SOL)
MIN_BALANCE_LAMPORTS = LAMPORTS_PER_SOL // 10

# Image + metadata pinning endpoint
UPLOAD_URL = "https://up.supapump.fun/api/ipfs"
UPLOAD_SHOW_NAME = "true"
UPLOAD_CREATED_ON = "https://pump.fun"

EXPLORER_URL = "https://solscan.io"

# Metaplex Token Metadata program
TOKEN_METADATA_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"

# SPL mint account size (bytes)
MINT_ACCOUNT_SIZE = 82

# Metaplex token metadata limits (bytes)
MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10

MAX_DECIMALS = 255
MAX_U64 = 2**64 - 1

CONFIRM_POLL_INTERVAL_S = 1.0
