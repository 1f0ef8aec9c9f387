"""Custom exception classes for assethub-deploy."""

from typing import Any, Dict, Optional


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    kind = "DeploymentError"

    def __init__(self, message: str = ""):
        super().__init__(message)
        # Filled in by the diagnostic reporter once the failure is reported
        self.attempt = None
        self.report = None


class ConfigurationError(DeploymentError, ValueError):
    """Raised when required settings (private key, RPC URL) are missing or malformed."""

    kind = "ConfigurationError"


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    kind = "NetworkNotFound"


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact file does not exist."""

    kind = "ArtifactNotFound"


class InvalidArtifactError(DeploymentError, ValueError):
    """Raised when an artifact file has no usable bytecode or ABI."""

    kind = "InvalidArtifact"


class ChainMismatchError(DeploymentError, ValueError):
    """Raised when the endpoint reports a different chain ID than expected."""

    kind = "ChainMismatch"

    def __init__(self, connected_id: int, expected_id: int, endpoint_url: str):
        super().__init__(
            f"Chain ID mismatch: connected to chain {connected_id} via {endpoint_url}, "
            f"expected chain ID {expected_id}"
        )
        self.connected_id = connected_id
        self.expected_id = expected_id
        self.endpoint_url = endpoint_url


class InsufficientFundsError(DeploymentError, ValueError):
    """Raised when the account balance cannot cover the worst-case deployment cost."""

    kind = "InsufficientFunds"

    def __init__(self, balance: int, estimated_cost: int):
        super().__init__(f"Insufficient balance: {balance} < {estimated_cost}")
        self.balance = balance
        self.estimated_cost = estimated_cost


class SubmissionFailedError(DeploymentError):
    """Raised when signing or submitting the creation transaction fails."""

    kind = "SubmissionFailed"


class ExecutionRevertedError(DeploymentError):
    """Raised when the deployment was mined but its execution failed."""

    kind = "ExecutionReverted"

    def __init__(self, transaction_hash: str, receipt: Dict[str, Any]):
        super().__init__(
            f"Transaction {transaction_hash} failed. Status: {receipt.get('status')}"
        )
        self.transaction_hash = transaction_hash
        self.receipt = receipt


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when no receipt arrives within the confirmation window."""

    kind = "ConfirmationTimeout"

    def __init__(self, transaction_hash: str, timeout: Optional[float] = None):
        super().__init__(
            f"Transaction {transaction_hash} was not confirmed within {timeout} seconds"
        )
        self.transaction_hash = transaction_hash
        self.timeout = timeout


class TransportError(DeploymentError, ConnectionError):
    """Raised when the RPC endpoint cannot be reached or returns an error."""

    kind = "TransportFailure"
