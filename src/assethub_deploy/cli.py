"""Command-line entry point for assethub-deploy."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .artifacts import load_contract_artifact, parse_contract_artifact
from .config import get_network_config, load_account, load_private_key
from .constants import CONFIRMATION_TIMEOUT, DEFAULT_CONTRACT, DEFAULT_NETWORK, SETTLE_DELAY
from .diagnostics import iter_error_chain, report_failure
from .exceptions import ChainMismatchError, DeploymentError
from .pipeline import deploy
from .rpc import RpcClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assethub-deploy",
        description="Deploy a compiled contract artifact after verifying chain, gas and balance.",
    )
    parser.add_argument(
        "contract",
        nargs="?",
        default=DEFAULT_CONTRACT,
        help=f"Contract name to deploy (default: {DEFAULT_CONTRACT})",
    )
    parser.add_argument("--network", default=DEFAULT_NETWORK, help="Target network name")
    parser.add_argument("--rpc-url", help="RPC endpoint (defaults to $RPC_URL or the network default)")
    parser.add_argument("--artifacts-dir", type=Path, help="Artifacts root (default: ./artifacts-pvm)")
    parser.add_argument("--artifact", type=Path, help="Explicit artifact JSON file; overrides contract lookup")
    parser.add_argument("--env-file", type=Path, help="Read environment from this .env file")
    parser.add_argument(
        "--settle-delay",
        type=float,
        default=SETTLE_DELAY,
        help=f"Seconds to wait before submitting (default: {SETTLE_DELAY})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=CONFIRMATION_TIMEOUT,
        help=f"Seconds to wait for confirmation (default: {CONFIRMATION_TIMEOUT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_recommended_actions(error: DeploymentError, network_name: str, chain_id: Optional[int]) -> None:
    print("\nCritical deployment failure!", file=sys.stderr)
    if isinstance(error, ChainMismatchError):
        print("Network configuration error:", file=sys.stderr)
        print(str(error), file=sys.stderr)
    else:
        print(f"Root cause: {error}", file=sys.stderr)
        for cause in iter_error_chain(error):
            print(f"Underlying error: {type(cause).__name__}: {cause}", file=sys.stderr)

    print("\nRecommended actions:", file=sys.stderr)
    print(f"1. Verify RPC endpoint configuration (must be {network_name})", file=sys.stderr)
    if chain_id is not None:
        print(f"2. Check network chain ID matches (expected: {chain_id})", file=sys.stderr)
    else:
        print("2. Check network chain ID matches", file=sys.stderr)
    print("3. Review account balance and gas parameters", file=sys.stderr)
    print("4. Validate contract compilation artifacts", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Run a deployment; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.env_file is not None:
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    network = None
    network_name = args.network
    chain_id = None
    try:
        network = get_network_config(args.network, rpc_url=args.rpc_url)
        network_name, chain_id = network.chain_name, network.chain_id

        account = load_account(load_private_key())
        if args.artifact is not None:
            artifact = parse_contract_artifact(args.artifact)
        else:
            artifact = load_contract_artifact(args.contract, args.artifacts_dir)

        logger.info("Starting %s deployment to %s", artifact.name, network.chain_name)
        outcome = deploy(
            RpcClient(network.rpc_url),
            account,
            artifact,
            network,
            settle_delay=args.settle_delay,
            confirmation_timeout=args.timeout,
        )
    except DeploymentError as e:
        if e.report is None:
            # Failed before the pipeline could report it
            e.report = report_failure(e, None, network)
        _print_recommended_actions(e, network_name, chain_id)
        return 1

    print("\nDeployment successful!")
    print(f"- Contract Address: {outcome.contract_address}")
    print(f"- Transaction Hash: {outcome.transaction_hash}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
