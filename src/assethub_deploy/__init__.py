"""
assethub-deploy: guarded smart contract deployment to Westend AssetHub and other EVM networks
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import load_contract_artifact, parse_contract_artifact
from .config import get_network_config, load_account, load_private_key
from .diagnostics import build_report, format_report, iter_error_chain
from .exceptions import (
    ArtifactNotFoundError,
    ChainMismatchError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DeploymentError,
    ExecutionRevertedError,
    InsufficientFundsError,
    InvalidArtifactError,
    NetworkNotFoundError,
    SubmissionFailedError,
    TransportError,
)
from .pipeline import deploy, outcome_from_receipt, plan_gas
from .rpc import RpcClient
from .types import (
    ContractArtifact,
    DeploymentAttempt,
    DeploymentOutcome,
    DiagnosticReport,
    GasPlan,
    NetworkConfig,
    NetworkIdentity,
)

try:
    __version__ = version("assethub-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "deploy",
    "plan_gas",
    "outcome_from_receipt",
    "RpcClient",
    "get_network_config",
    "load_private_key",
    "load_account",
    "load_contract_artifact",
    "parse_contract_artifact",
    "build_report",
    "format_report",
    "iter_error_chain",
    "ContractArtifact",
    "DeploymentAttempt",
    "DeploymentOutcome",
    "DiagnosticReport",
    "GasPlan",
    "NetworkConfig",
    "NetworkIdentity",
    "DeploymentError",
    "ConfigurationError",
    "NetworkNotFoundError",
    "ArtifactNotFoundError",
    "InvalidArtifactError",
    "ChainMismatchError",
    "InsufficientFundsError",
    "SubmissionFailedError",
    "ExecutionRevertedError",
    "ConfirmationTimeoutError",
    "TransportError",
]
