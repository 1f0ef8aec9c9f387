"""web3-backed RPC client for assethub-deploy."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import requests
from eth_account.signers.local import LocalAccount
from eth_utils import to_hex
from web3 import HTTPProvider, Web3
from web3.exceptions import TimeExhausted, Web3Exception

from .constants import RECEIPT_POLL_INTERVAL, REQUEST_TIMEOUT
from .exceptions import TransportError

logger = logging.getLogger(__name__)


@contextmanager
def _rpc_errors(method: str) -> Iterator[None]:
    """Re-raise transport and node errors from web3 as TransportError."""
    try:
        yield
    except (requests.RequestException, Web3Exception, ValueError) as e:
        raise TransportError(f"RPC call {method} failed: {e}") from e


class RpcClient:
    """Connected client for one endpoint, exposing only what a deployment needs."""

    def __init__(
        self,
        url: str,
        timeout: float = REQUEST_TIMEOUT,
        web3: Optional[Web3] = None,
    ):
        """
        Initialize the client.

        Args:
            url: HTTP(S) JSON-RPC endpoint
            timeout: Per-request timeout in seconds
            web3: Preconfigured Web3 instance (defaults to an HTTPProvider for `url`)
        """
        self.url = url
        self.web3 = web3 or Web3(HTTPProvider(url, request_kwargs={"timeout": timeout}))

    def get_chain_id(self) -> int:
        with _rpc_errors("eth_chainId"):
            return self.web3.eth.chain_id

    def get_balance(self, address: str, block: str = "latest") -> int:
        with _rpc_errors("eth_getBalance"):
            return self.web3.eth.get_balance(address, block)

    def get_transaction_count(self, address: str, block: str = "latest") -> int:
        with _rpc_errors("eth_getTransactionCount"):
            return self.web3.eth.get_transaction_count(address, block)

    def get_gas_price(self) -> int:
        with _rpc_errors("eth_gasPrice"):
            return self.web3.eth.gas_price

    def get_block(self, block: str = "latest") -> Dict[str, Any]:
        """Fetch a block header (no full transactions)."""
        with _rpc_errors("eth_getBlockByNumber"):
            return dict(self.web3.eth.get_block(block))

    def wait_for_transaction_receipt(
        self,
        transaction_hash: str,
        timeout: float,
        poll_interval: float = RECEIPT_POLL_INTERVAL,
    ) -> Dict[str, Any]:
        """
        Block until the transaction is mined.

        Raises:
            TimeoutError: If no receipt is available after `timeout` seconds
        """
        with _rpc_errors("eth_getTransactionReceipt"):
            try:
                receipt = self.web3.eth.wait_for_transaction_receipt(
                    transaction_hash, timeout=timeout, poll_latency=poll_interval
                )
            except TimeExhausted as e:
                raise TimeoutError(
                    f"No receipt for {transaction_hash} after {timeout} seconds"
                ) from e
        return dict(receipt)

    def deploy_contract(
        self,
        abi: List[Dict[str, Any]],
        bytecode: str,
        gas: int,
        gas_price: int,
        nonce: int,
        account: LocalAccount,
        chain_id: int,
    ) -> str:
        """
        Sign and submit a contract-creation transaction without constructor arguments.

        Returns:
            0x-prefixed transaction hash reported by the node
        """
        contract = self.web3.eth.contract(abi=abi, bytecode=bytecode)
        with _rpc_errors("eth_sendRawTransaction"):
            transaction = contract.constructor().build_transaction(
                {
                    "from": account.address,
                    "gas": gas,
                    "gasPrice": gas_price,
                    "nonce": nonce,
                    "chainId": chain_id,
                }
            )
            signed = account.sign_transaction(transaction)
            tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)

        logger.debug("Raw creation transaction sent for nonce %s", nonce)
        return to_hex(tx_hash)
