"""Shared pytest fixtures for assethub-deploy tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from eth_account import Account

from assethub_deploy.types import ContractArtifact, NetworkConfig

# Well-known development key (hardhat/anvil account #0); never holds real funds
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TX_HASH = "0x" + "ab" * 32
CONTRACT_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"


class FakeRpcClient:
    """In-memory RPC client that records every call in order."""

    def __init__(
        self,
        chain_id: int = 10081,
        balance: int = 10**22,
        nonce: int = 7,
        block_gas_limit: int = 100_000_000,
        gas_price: int = 1_000_000_000,
        tx_hash: str = TX_HASH,
        receipt: Optional[Dict[str, Any]] = None,
        submit_error: Optional[Exception] = None,
        receipt_error: Optional[Exception] = None,
        read_error: Optional[Exception] = None,
    ):
        self.url = "http://fake-rpc.example.com"
        self.calls: List[str] = []
        self.deploy_kwargs: Optional[Dict[str, Any]] = None
        self.chain_id = chain_id
        self.balance = balance
        self.nonce = nonce
        self.block_gas_limit = block_gas_limit
        self.gas_price = gas_price
        self.tx_hash = tx_hash
        self.receipt = receipt if receipt is not None else {
            "status": "0x1",
            "transactionHash": tx_hash,
            "contractAddress": CONTRACT_ADDRESS,
            "blockNumber": "0x10",
        }
        self.submit_error = submit_error
        self.receipt_error = receipt_error
        self.read_error = read_error

    def get_chain_id(self) -> int:
        self.calls.append("get_chain_id")
        return self.chain_id

    def get_balance(self, address: str) -> int:
        self.calls.append("get_balance")
        if self.read_error is not None:
            raise self.read_error
        return self.balance

    def get_transaction_count(self, address: str) -> int:
        self.calls.append("get_transaction_count")
        return self.nonce

    def get_block(self) -> Dict[str, Any]:
        self.calls.append("get_block")
        return {"number": 16, "gasLimit": self.block_gas_limit}

    def get_gas_price(self) -> int:
        self.calls.append("get_gas_price")
        return self.gas_price

    def deploy_contract(self, **kwargs: Any) -> str:
        self.calls.append("deploy_contract")
        self.deploy_kwargs = kwargs
        if self.submit_error is not None:
            raise self.submit_error
        return self.tx_hash

    def wait_for_transaction_receipt(self, transaction_hash: str, timeout: float) -> Dict[str, Any]:
        self.calls.append("wait_for_transaction_receipt")
        if self.receipt_error is not None:
            raise self.receipt_error
        return self.receipt


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_root(fixtures_dir: Path) -> Path:
    """Return the fixture artifacts directory (hardhat layout)."""
    return fixtures_dir / "artifacts-pvm"


@pytest.fixture
def dividend_token_artifact_path(artifacts_root: Path) -> Path:
    """Return path to the sample DividendToken artifact."""
    return artifacts_root / "contracts" / "DividendToken.sol" / "DividendToken.json"


@pytest.fixture
def artifact() -> ContractArtifact:
    """A minimal compiled contract."""
    return ContractArtifact(
        name="DividendToken",
        abi=[{"inputs": [], "stateMutability": "nonpayable", "type": "constructor"}],
        bytecode="0x6080604052348015600f57600080fd5b50",
    )


@pytest.fixture
def network() -> NetworkConfig:
    """Westend AssetHub style network with a test RPC URL."""
    return NetworkConfig(
        name="westend-asset-hub",
        chain_id=10081,
        chain_name="Westend AssetHub",
        rpc_url="http://fake-rpc.example.com",
        currency_symbol="WND",
        currency_decimals=18,
        min_gas_price=100_000_000,
        default_gas_limit=30_000_000,
        block_explorer_url="https://explorer.example.com",
        testnet=True,
    )


@pytest.fixture
def account():
    """Local signing account for the development key."""
    return Account.from_key(TEST_PRIVATE_KEY)


@pytest.fixture
def fake_client() -> FakeRpcClient:
    """Fake RPC client on the expected chain with plenty of funds."""
    return FakeRpcClient()

