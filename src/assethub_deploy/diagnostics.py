"""Failure diagnostics for assethub-deploy."""

import logging
from typing import Iterator, List, Optional

from eth_utils import from_wei

from .exceptions import (
    ChainMismatchError,
    ConfigurationError,
    ConfirmationTimeoutError,
    ExecutionRevertedError,
    InsufficientFundsError,
    TransportError,
)
from .types import DeploymentAttempt, DiagnosticReport, NetworkConfig

logger = logging.getLogger(__name__)


def format_units(value: int, decimals: int) -> str:
    """Render an integer amount of the smallest unit with `decimals` places, trimming zeros."""
    integer, fraction = divmod(value, 10**decimals)
    if not fraction:
        return str(integer)
    return f"{integer}.{str(fraction).zfill(decimals).rstrip('0')}"


def iter_error_chain(error: BaseException) -> Iterator[BaseException]:
    """
    Yield the errors underlying `error`, outermost first, excluding `error` itself.

    Follows explicit causes (`raise ... from`) and, unless suppressed,
    implicit context. Stops on cycles.
    """
    seen = {id(error)}
    current: Optional[BaseException] = error
    while current is not None:
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None

        if current is None or id(current) in seen:
            return
        seen.add(id(current))
        yield current


def _describe(error: BaseException) -> str:
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name


def suggestions_for(error: BaseException, network: Optional[NetworkConfig] = None) -> List[str]:
    """Return remediation hints for a failure, most specific first."""
    chain_name = network.chain_name if network else "the target network"

    if isinstance(error, ChainMismatchError):
        return [
            "Check your RPC endpoint URL (RPC_URL environment variable or --rpc-url)",
            f"Verify the endpoint is for {chain_name} (expected chain ID {error.expected_id})",
            f"Ensure your wallet is connected to {chain_name}",
        ]
    if isinstance(error, InsufficientFundsError):
        return [
            f"Fund the deployer account with at least {error.estimated_cost - error.balance} "
            "more in the smallest unit",
            "The estimate assumes the full gas limit is used; actual cost is usually lower",
        ]
    if isinstance(error, ConfirmationTimeoutError):
        return [
            f"Look up transaction {error.transaction_hash} later; it may still confirm",
            "Do not resubmit with the same nonce until the transaction is dropped or mined",
        ]
    if isinstance(error, ExecutionRevertedError):
        return [
            "Check contract bytecode and ABI (rebuild the artifacts)",
            "Try a higher gas limit if execution ran out of gas",
        ]
    if isinstance(error, ConfigurationError):
        return ["Check the private key and network settings in your environment"]
    if isinstance(error, TransportError):
        return ["Verify network connection and RPC endpoint"]

    return [
        "Check account balance",
        "Try increasing gas price",
        "Verify network connection and RPC endpoint",
        "Check contract bytecode and ABI",
    ]


def build_report(
    error: BaseException,
    attempt: Optional[DeploymentAttempt],
    network: Optional[NetworkConfig] = None,
) -> DiagnosticReport:
    """Assemble a structured diagnostic from a failure and the attempt snapshot."""
    report = DiagnosticReport(
        kind=getattr(error, "kind", type(error).__name__),
        message=str(error),
        causes=[_describe(cause) for cause in iter_error_chain(error)],
        suggestions=suggestions_for(error, network),
    )

    if attempt is not None:
        report.account = attempt.account_address
        report.nonce = attempt.nonce
        report.balance = attempt.balance
        report.gas_plan = attempt.plan
        report.transaction_hash = attempt.submitted_hash

    # Timeouts and reverts know their hash even without an attempt
    if report.transaction_hash is None:
        report.transaction_hash = getattr(error, "transaction_hash", None)

    return report


def format_report(report: DiagnosticReport, network: Optional[NetworkConfig] = None) -> str:
    """Render a diagnostic report as operator-facing text."""
    symbol = network.currency_symbol if network else "native units"
    decimals = network.currency_decimals if network else 18

    lines = ["Deployment failed!", f"Failure: {report.kind}", "Last transaction parameters:"]
    if report.gas_plan is not None:
        lines.append(f"- Gas Limit: {report.gas_plan.limit}")
        lines.append(f"- Gas Price: {from_wei(report.gas_plan.price, 'gwei')} gwei")
        lines.append(
            f"- Estimated Cost: {format_units(report.gas_plan.estimated_cost, decimals)} {symbol}"
        )
    else:
        lines.append("- Gas: not planned")
    lines.append(f"- Nonce: {report.nonce if report.nonce is not None else 'unknown'}")
    lines.append(f"- Account: {report.account or 'unknown'}")
    if report.balance is not None:
        lines.append(f"- Balance: {format_units(report.balance, decimals)} {symbol}")
    else:
        lines.append("- Balance: unknown")

    if report.transaction_hash:
        lines.append(f"Transaction Hash: {report.transaction_hash}")
        if network is not None and network.block_explorer_url:
            lines.append(f"Explorer: {network.block_explorer_url}/tx/{report.transaction_hash}")

    lines.append("Error details:")
    lines.append(f"- Message: {report.message}")
    for cause in report.causes:
        lines.append(f"- Underlying error: {cause}")

    lines.append("Suggested solutions:")
    lines.extend(f"{i}. {hint}" for i, hint in enumerate(report.suggestions, start=1))

    return "\n".join(lines)


def report_failure(
    error: BaseException,
    attempt: Optional[DeploymentAttempt],
    network: Optional[NetworkConfig] = None,
) -> Optional[DiagnosticReport]:
    """
    Build, log and return the diagnostic for a failure.

    Never raises: a failure while reporting is logged and None is returned,
    so the caller can always re-raise the original error.
    """
    try:
        report = build_report(error, attempt, network)
        logger.error("%s", format_report(report, network))
        return report
    except Exception:
        logger.exception("Failed to build diagnostic report for %r", error)
        return None
