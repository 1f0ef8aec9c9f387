"""Network and credential configuration for assethub-deploy."""

import os
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .constants import NETWORK_CONFIG, PRIVATE_KEY_ENV, RPC_URL_ENV
from .exceptions import ConfigurationError, NetworkNotFoundError
from .types import NetworkConfig


def get_network_config(network: str, rpc_url: Optional[str] = None) -> NetworkConfig:
    """
    Build the configuration for a registered network.

    Args:
        network: Network name (key of NETWORK_CONFIG)
        rpc_url: RPC endpoint override (defaults to $RPC_URL, then the registry URL)

    Returns:
        NetworkConfig for the network

    Raises:
        NetworkNotFoundError: If the network is not registered
    """
    if network not in NETWORK_CONFIG:
        raise NetworkNotFoundError(
            f"Network '{network}' is not configured. "
            f"Known networks: {', '.join(sorted(NETWORK_CONFIG))}"
        )

    entry = NETWORK_CONFIG[network]

    if rpc_url is None:
        rpc_url = os.environ.get(RPC_URL_ENV) or entry["rpc_url"]

    return NetworkConfig(
        name=network,
        chain_id=entry["chain_id"],
        chain_name=entry["chain_name"],
        rpc_url=rpc_url,
        currency_symbol=entry["currency_symbol"],
        currency_decimals=entry["currency_decimals"],
        min_gas_price=entry["min_gas_price"],
        default_gas_limit=entry["default_gas_limit"],
        block_explorer_url=entry.get("block_explorer_url"),
        testnet=entry.get("testnet", False),
    )


def load_private_key(private_key: Optional[str] = None) -> str:
    """
    Resolve the deployer's private key.

    Args:
        private_key: Explicit key (defaults to $AH_PRIV_KEY)

    Returns:
        0x-prefixed hex private key

    Raises:
        ConfigurationError: If no key is available or it lacks the 0x prefix
    """
    if private_key is None:
        private_key = os.environ.get(PRIVATE_KEY_ENV)

    if not private_key or not private_key.startswith("0x"):
        raise ConfigurationError(
            f"{PRIVATE_KEY_ENV} is not defined or does not start with \"0x\". "
            "Please check your environment variables."
        )
    return private_key


def load_account(private_key: str) -> LocalAccount:
    """Construct a signing account from a private key."""
    try:
        return Account.from_key(private_key)
    except Exception as e:
        # Never echo the key itself
        raise ConfigurationError(f"{PRIVATE_KEY_ENV} is not a valid private key") from e
