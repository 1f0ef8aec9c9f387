"""Unit tests for network verification, affordability, submission and confirmation."""

import pytest

from assethub_deploy.exceptions import (
    ChainMismatchError,
    ConfirmationTimeoutError,
    ExecutionRevertedError,
    InsufficientFundsError,
    SubmissionFailedError,
)
from assethub_deploy.pipeline import (
    await_confirmation,
    check_affordability,
    outcome_from_receipt,
    receipt_succeeded,
    submit_deployment,
    verify_network,
)
from assethub_deploy.types import DeploymentAttempt, GasPlan

from conftest import CONTRACT_ADDRESS, TEST_ADDRESS, TX_HASH, FakeRpcClient


class TestVerifyNetwork:
    """Test the network identity check."""

    def test_matching_chain_passes(self, network):
        """Test that the expected chain ID passes and is returned."""
        client = FakeRpcClient(chain_id=10081)

        assert verify_network(client, network) == 10081
        assert client.calls == ["get_chain_id"]

    def test_mismatched_chain_raises(self, network):
        """Test that a different chain ID raises ChainMismatchError with details."""
        client = FakeRpcClient(chain_id=1)

        with pytest.raises(ChainMismatchError) as exc_info:
            verify_network(client, network)

        assert exc_info.value.connected_id == 1
        assert exc_info.value.expected_id == 10081
        assert exc_info.value.endpoint_url == client.url

    def test_endpoint_falls_back_to_configured_url(self, network):
        """Test the configured endpoint is reported when the client has no url."""

        class Anonymous:
            def get_chain_id(self):
                return 5

        with pytest.raises(ChainMismatchError) as exc_info:
            verify_network(Anonymous(), network)

        assert exc_info.value.endpoint_url == network.rpc_url


class TestCheckAffordability:
    """Test the balance guard."""

    def test_sufficient_balance_passes(self):
        """Test that balance above the estimate returns the estimate."""
        plan = GasPlan(price=100, limit=1_000)

        assert check_affordability(1_000_000, plan) == 100_000

    def test_exact_balance_passes(self):
        """Test that balance equal to the estimate is enough."""
        plan = GasPlan(price=100, limit=1_000)

        assert check_affordability(100_000, plan) == 100_000

    def test_insufficient_balance_raises(self):
        """Test that balance below the estimate raises with both values."""
        plan = GasPlan(price=100, limit=1_000)

        with pytest.raises(InsufficientFundsError) as exc_info:
            check_affordability(99_999, plan)

        assert exc_info.value.balance == 99_999
        assert exc_info.value.estimated_cost == 100_000


class TestSubmitDeployment:
    """Test the deployment submitter."""

    @pytest.fixture
    def attempt(self):
        return DeploymentAttempt(
            account_address=TEST_ADDRESS,
            balance=10**20,
            nonce=3,
            plan=GasPlan(price=100_000_000, limit=15_000_000),
        )

    def test_submits_planned_parameters(self, attempt, artifact, account):
        """Test the planned gas, nonce and account are passed through."""
        client = FakeRpcClient()

        tx_hash = submit_deployment(client, account, artifact, attempt, chain_id=10081)

        assert tx_hash == TX_HASH
        assert client.deploy_kwargs == {
            "abi": artifact.abi,
            "bytecode": artifact.bytecode,
            "gas": 15_000_000,
            "gas_price": 100_000_000,
            "nonce": 3,
            "account": account,
            "chain_id": 10081,
        }

    def test_records_hash_on_attempt(self, attempt, artifact, account):
        """Test the hash is stored on the attempt immediately."""
        submit_deployment(FakeRpcClient(), account, artifact, attempt, chain_id=10081)

        assert attempt.submitted_hash == TX_HASH

    def test_failure_wrapped_with_cause(self, attempt, artifact, account):
        """Test that any submission error becomes SubmissionFailedError with its cause."""
        cause = ValueError("nonce too low")
        client = FakeRpcClient(submit_error=cause)

        with pytest.raises(SubmissionFailedError) as exc_info:
            submit_deployment(client, account, artifact, attempt, chain_id=10081)

        assert exc_info.value.__cause__ is cause
        assert attempt.submitted_hash is None

    def test_hash_recorded_only_once(self, attempt):
        """Test the attempt refuses a second submission hash."""
        attempt.record_submission("0x01")

        with pytest.raises(RuntimeError):
            attempt.record_submission("0x02")
        assert attempt.submitted_hash == "0x01"


class TestReceiptStatus:
    """Test receipt status interpretation."""

    @pytest.mark.parametrize("status", ["0x1", 1, "success"])
    def test_success_encodings(self, status):
        """Test each success encoding is recognised."""
        assert receipt_succeeded({"status": status}) is True

    @pytest.mark.parametrize("status", ["0x0", 0, "reverted", None])
    def test_failure_encodings(self, status):
        """Test each failure encoding is recognised."""
        assert receipt_succeeded({"status": status}) is False


class TestOutcomeFromReceipt:
    """Test extraction of the deployment outcome."""

    def test_extracts_address_and_hash(self):
        """Test the outcome carries the receipt address (checksummed) and hash."""
        receipt = {"status": "0x1", "contractAddress": CONTRACT_ADDRESS}

        outcome = outcome_from_receipt(TX_HASH, receipt)

        assert outcome.contract_address.lower() == CONTRACT_ADDRESS
        assert outcome.contract_address == "0x5FbDB2315678afecb367f032d93F642f64180aa3"
        assert outcome.transaction_hash == TX_HASH
        assert outcome.receipt is receipt

    def test_extraction_is_idempotent(self):
        """Test deriving twice from the same receipt yields identical values."""
        receipt = {"status": "0x1", "contractAddress": CONTRACT_ADDRESS}

        first = outcome_from_receipt(TX_HASH, receipt)
        second = outcome_from_receipt(TX_HASH, receipt)

        assert first == second
        assert first.contract_address == second.contract_address
        assert first.transaction_hash == second.transaction_hash

    def test_failed_status_raises_reverted(self):
        """Test a failed receipt is never treated as success."""
        receipt = {"status": "0x0", "contractAddress": None}

        with pytest.raises(ExecutionRevertedError) as exc_info:
            outcome_from_receipt(TX_HASH, receipt)

        assert exc_info.value.receipt is receipt
        assert exc_info.value.transaction_hash == TX_HASH

    def test_missing_contract_address_raises_reverted(self):
        """Test a success status without a created contract is a failure."""
        with pytest.raises(ExecutionRevertedError):
            outcome_from_receipt(TX_HASH, {"status": "0x1", "contractAddress": None})


class TestAwaitConfirmation:
    """Test the confirmation tracker."""

    def test_confirmed_success(self):
        """Test a successful receipt yields the outcome."""
        outcome = await_confirmation(FakeRpcClient(), TX_HASH, timeout=60)

        assert outcome.transaction_hash == TX_HASH
        assert outcome.contract_address.lower() == CONTRACT_ADDRESS

    def test_timeout_raises_with_hash(self):
        """Test a receipt timeout becomes ConfirmationTimeoutError with the hash."""
        client = FakeRpcClient(receipt_error=TimeoutError("no receipt"))

        with pytest.raises(ConfirmationTimeoutError) as exc_info:
            await_confirmation(client, TX_HASH, timeout=60)

        assert exc_info.value.transaction_hash == TX_HASH
        assert exc_info.value.timeout == 60
        assert isinstance(exc_info.value.__cause__, TimeoutError)

    def test_confirmed_failed(self):
        """Test a failed receipt raises ExecutionRevertedError."""
        client = FakeRpcClient(receipt={"status": "0x0", "contractAddress": None})

        with pytest.raises(ExecutionRevertedError):
            await_confirmation(client, TX_HASH, timeout=60)
