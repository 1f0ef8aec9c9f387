"""Deploy-and-verify pipeline for assethub-deploy.

Stages run strictly in order and the first failure halts the pipeline:

    verify_network -> read balance/nonce -> plan_gas -> check_affordability
        -> (settle) -> submit_deployment -> await_confirmation

The diagnostic reporter wraps the whole sequence.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Tuple

from eth_utils import from_wei, to_checksum_address

from .constants import CONFIRMATION_TIMEOUT, GAS_LIMIT_BLOCK_PERCENT, SETTLE_DELAY
from .diagnostics import format_units, report_failure
from .exceptions import (
    ChainMismatchError,
    ConfirmationTimeoutError,
    DeploymentError,
    ExecutionRevertedError,
    InsufficientFundsError,
    SubmissionFailedError,
    TransportError,
)
from .types import ContractArtifact, DeploymentAttempt, DeploymentOutcome, GasPlan, NetworkConfig

logger = logging.getLogger(__name__)


def verify_network(client: Any, network: NetworkConfig) -> int:
    """
    Confirm the endpoint serves the expected chain.

    Returns:
        The chain ID reported by the endpoint

    Raises:
        ChainMismatchError: If the reported chain ID differs from the configured one
    """
    identity = network.identity
    connected_id = client.get_chain_id()
    if connected_id != identity.expected_chain_id:
        raise ChainMismatchError(
            connected_id=connected_id,
            expected_id=identity.expected_chain_id,
            endpoint_url=getattr(client, "url", identity.expected_endpoint),
        )

    logger.info(
        "Network verified: connected to %s (chain ID %s)", network.chain_name, connected_id
    )
    return connected_id


def plan_gas(gas_price: int, block_gas_limit: int, network: NetworkConfig) -> GasPlan:
    """
    Derive gas price and limit from live network state.

    The price is clamped upward to the network floor, never down. The limit is
    the lesser of a fixed share of the block gas ceiling and the network default.
    """
    price = max(gas_price, network.min_gas_price)
    limit = min(block_gas_limit * GAS_LIMIT_BLOCK_PERCENT // 100, network.default_gas_limit)
    return GasPlan(price=price, limit=limit)


def fetch_gas_inputs(client: Any) -> Tuple[int, int]:
    """
    Fetch the latest block's gas limit and the current gas price concurrently.

    Returns:
        Tuple of (gas_price, block_gas_limit)
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        block_future = pool.submit(client.get_block)
        price_future = pool.submit(client.get_gas_price)
        block = block_future.result()
        gas_price = price_future.result()

    return gas_price, block["gasLimit"]


def check_affordability(balance: int, plan: GasPlan) -> int:
    """
    Ensure the balance covers the worst-case cost of the plan.

    Returns:
        The estimated cost

    Raises:
        InsufficientFundsError: If balance < price * limit
    """
    estimated_cost = plan.estimated_cost
    if balance < estimated_cost:
        raise InsufficientFundsError(balance=balance, estimated_cost=estimated_cost)
    return estimated_cost


def submit_deployment(
    client: Any,
    account: Any,
    artifact: ContractArtifact,
    attempt: DeploymentAttempt,
    chain_id: int,
) -> str:
    """
    Sign and submit the creation transaction exactly once.

    The hash is recorded on the attempt before returning so that a later
    confirmation failure can still report it.

    Raises:
        SubmissionFailedError: On any signing, encoding or RPC failure
    """
    try:
        transaction_hash = client.deploy_contract(
            abi=artifact.abi,
            bytecode=artifact.bytecode,
            gas=attempt.plan.limit,
            gas_price=attempt.plan.price,
            nonce=attempt.nonce,
            account=account,
            chain_id=chain_id,
        )
    except Exception as e:
        raise SubmissionFailedError(f"Failed to submit deployment of {artifact.name}: {e}") from e

    attempt.record_submission(transaction_hash)
    logger.info("Transaction submitted. Hash: %s", transaction_hash)
    return transaction_hash


def receipt_succeeded(receipt: Dict[str, Any]) -> bool:
    """Interpret a receipt status in any of the encodings clients use."""
    status = receipt.get("status")
    if isinstance(status, str):
        if status == "success":
            return True
        if status.startswith("0x"):
            return int(status, 16) == 1
        return False
    return status == 1


def outcome_from_receipt(transaction_hash: str, receipt: Dict[str, Any]) -> DeploymentOutcome:
    """
    Build the success outcome from a confirmed receipt.

    Raises:
        ExecutionRevertedError: If the receipt reports failure or carries no contract address
    """
    if not receipt_succeeded(receipt) or not receipt.get("contractAddress"):
        raise ExecutionRevertedError(transaction_hash=transaction_hash, receipt=receipt)

    return DeploymentOutcome(
        contract_address=to_checksum_address(receipt["contractAddress"]),
        transaction_hash=transaction_hash,
        receipt=receipt,
    )


def await_confirmation(
    client: Any, transaction_hash: str, timeout: float = CONFIRMATION_TIMEOUT
) -> DeploymentOutcome:
    """
    Block until the transaction is mined or the timeout elapses.

    Raises:
        ConfirmationTimeoutError: If no receipt arrived in time
        ExecutionRevertedError: If the transaction was mined but failed
    """
    logger.info("Waiting for transaction confirmation...")
    try:
        receipt = client.wait_for_transaction_receipt(transaction_hash, timeout=timeout)
    except TimeoutError as e:
        raise ConfirmationTimeoutError(transaction_hash=transaction_hash, timeout=timeout) from e

    logger.debug("Transaction receipt: %s", receipt)
    outcome = outcome_from_receipt(transaction_hash, receipt)
    logger.info("Contract successfully deployed at address: %s", outcome.contract_address)
    return outcome


def _log_gas_plan(block_gas_limit: int, plan: GasPlan, network: NetworkConfig) -> None:
    logger.info(
        "Gas parameters: block gas limit %s, gas price %s gwei, gas limit %s, "
        "estimated cost %s %s",
        block_gas_limit,
        from_wei(plan.price, "gwei"),
        plan.limit,
        format_units(plan.estimated_cost, network.currency_decimals),
        network.currency_symbol,
    )


def deploy(
    client: Any,
    account: Any,
    artifact: ContractArtifact,
    network: NetworkConfig,
    *,
    settle_delay: float = SETTLE_DELAY,
    confirmation_timeout: float = CONFIRMATION_TIMEOUT,
    sleep: Callable[[float], None] = time.sleep,
) -> DeploymentOutcome:
    """
    Deploy a contract artifact and wait for it to be confirmed.

    Args:
        client: Connected RPC client (see RpcClient)
        account: Signing account exposing `address`
        artifact: Compiled contract (ABI + bytecode)
        network: Target network configuration
        settle_delay: Pause in seconds between the affordability check and submission
        confirmation_timeout: Seconds to wait for the receipt
        sleep: Sleep function, replaceable in tests

    Returns:
        DeploymentOutcome with the contract address, transaction hash and receipt

    Raises:
        DeploymentError: Any pipeline failure, after being reported. The error
            carries the attempt snapshot in `attempt` and the diagnostic in `report`.
    """
    attempt = DeploymentAttempt(account_address=account.address)
    logger.info("Wallet address: %s", attempt.account_address)
    logger.info(
        "Network configuration: expected chain %s, chain ID %s, RPC endpoint %s",
        network.chain_name,
        network.chain_id,
        network.rpc_url,
    )

    try:
        try:
            chain_id = verify_network(client, network)

            attempt.balance = client.get_balance(attempt.account_address)
            logger.info(
                "Balance: %s %s",
                format_units(attempt.balance, network.currency_decimals),
                network.currency_symbol,
            )
            attempt.nonce = client.get_transaction_count(attempt.account_address)
            logger.info("Nonce: %s", attempt.nonce)

            gas_price, block_gas_limit = fetch_gas_inputs(client)
            attempt.plan = plan_gas(gas_price, block_gas_limit, network)
            _log_gas_plan(block_gas_limit, attempt.plan, network)

            check_affordability(attempt.balance, attempt.plan)
            sleep(settle_delay)

            transaction_hash = submit_deployment(client, account, artifact, attempt, chain_id)
            return await_confirmation(client, transaction_hash, timeout=confirmation_timeout)
        except DeploymentError:
            raise
        except Exception as e:
            raise TransportError(f"RPC collaborator failed: {e}") from e
    except DeploymentError as error:
        error.attempt = attempt
        error.report = report_failure(error, attempt, network)
        raise
