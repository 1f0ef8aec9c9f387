"""Configuration constants for assethub-deploy."""

# Network configuration for the chains this tool deploys to.
# Gas floors and ceilings are mandated by each network's runtime.
NETWORK_CONFIG = {
    "westend-asset-hub": {
        "chain_id": 10081,
        "chain_name": "Westend AssetHub",
        "rpc_url": "https://westend-asset-hub-rpc.polkadot.io",
        "currency_symbol": "WND",
        "currency_decimals": 18,
        "min_gas_price": 100_000_000,
        "default_gas_limit": 30_000_000,
        "block_explorer_url": "https://blockscout-asset-hub.parity-chains-scw.parity.io",
        "testnet": True,
    },
}

DEFAULT_NETWORK = "westend-asset-hub"
DEFAULT_CONTRACT = "DividendToken"
DEFAULT_ARTIFACTS_DIR = "artifacts-pvm"

# Environment variables
RPC_URL_ENV = "RPC_URL"
PRIVATE_KEY_ENV = "AH_PRIV_KEY"

# Share of the latest block's gas ceiling a deployment may claim
GAS_LIMIT_BLOCK_PERCENT = 30

# Seconds
CONFIRMATION_TIMEOUT = 60
SETTLE_DELAY = 5
RECEIPT_POLL_INTERVAL = 1
REQUEST_TIMEOUT = 30
