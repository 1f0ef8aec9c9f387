"""Data types and dataclasses for assethub-deploy."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class NetworkIdentity:
    """What the live endpoint must identify as before anything is signed."""

    expected_chain_id: int
    expected_endpoint: str


@dataclass(frozen=True)
class NetworkConfig:
    """Static description of a target network."""

    name: str  # Registry key, e.g. "westend-asset-hub"
    chain_id: int
    chain_name: str
    rpc_url: str
    currency_symbol: str
    currency_decimals: int
    min_gas_price: int  # Smallest fee unit (wei)
    default_gas_limit: int  # Compute units
    block_explorer_url: Optional[str] = None
    testnet: bool = False

    @property
    def identity(self) -> NetworkIdentity:
        return NetworkIdentity(expected_chain_id=self.chain_id, expected_endpoint=self.rpc_url)


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract output needed to submit a creation transaction."""

    name: str
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed hex


@dataclass(frozen=True)
class GasPlan:
    """Gas parameters derived once per deployment attempt."""

    price: int
    limit: int

    @property
    def estimated_cost(self) -> int:
        """Worst-case fee if the whole limit is consumed."""
        return self.price * self.limit


@dataclass
class DeploymentAttempt:
    """State of the single in-flight deployment, filled in stage by stage."""

    account_address: str
    balance: Optional[int] = None
    nonce: Optional[int] = None
    plan: Optional[GasPlan] = None
    submitted_hash: Optional[str] = None

    def record_submission(self, transaction_hash: str) -> None:
        if self.submitted_hash is not None:
            raise RuntimeError(
                f"Attempt already submitted as {self.submitted_hash}; refusing {transaction_hash}"
            )
        self.submitted_hash = transaction_hash


@dataclass(frozen=True)
class DeploymentOutcome:
    """Result of a confirmed, successful deployment."""

    contract_address: str
    transaction_hash: str
    receipt: Dict[str, Any] = field(compare=False)


@dataclass
class DiagnosticReport:
    """Structured account of a failed deployment attempt."""

    kind: str
    message: str
    account: Optional[str] = None
    nonce: Optional[int] = None
    balance: Optional[int] = None
    gas_plan: Optional[GasPlan] = None
    transaction_hash: Optional[str] = None
    causes: List[str] = field(default_factory=list)  # Underlying errors, outermost first
    suggestions: List[str] = field(default_factory=list)

    @property
    def estimated_cost(self) -> Optional[int]:
        if self.gas_plan is None:
            return None
        return self.gas_plan.estimated_cost

    @property
    def root_cause(self) -> str:
        return self.causes[-1] if self.causes else self.message
