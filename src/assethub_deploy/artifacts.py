"""Compiled contract artifact loading for assethub-deploy."""

import json
from pathlib import Path
from typing import Optional, Union

from .exceptions import ArtifactNotFoundError, InvalidArtifactError
from .paths import get_artifact_path
from .types import ContractArtifact


def parse_contract_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a compiled contract artifact JSON file.

    Args:
        file_path: Path to the artifact JSON (hardhat layout)

    Returns:
        ContractArtifact with 0x-prefixed bytecode

    Raises:
        ArtifactNotFoundError: If the file does not exist
        InvalidArtifactError: If the file is not JSON or lacks bytecode
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ArtifactNotFoundError(f"Contract artifact not found: {file_path}") from e
    except json.JSONDecodeError as e:
        raise InvalidArtifactError(f"Invalid contract data: {file_path}") from e

    if not isinstance(data, dict) or not data.get("bytecode"):
        raise InvalidArtifactError(f"Invalid contract data: {file_path}")

    bytecode = data["bytecode"]
    # Some toolchains emit {"object": "..."} instead of a plain string
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object", "")
    if not isinstance(bytecode, str):
        raise InvalidArtifactError(f"Invalid contract data: {file_path}")

    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if bytecode == "0x":
        raise InvalidArtifactError(f"Empty bytecode in contract data: {file_path}")

    abi = data.get("abi", [])
    if not isinstance(abi, list):
        raise InvalidArtifactError(f"Malformed ABI in contract data: {file_path}")

    name = data.get("contractName") or Path(file_path).stem
    return ContractArtifact(name=name, abi=abi, bytecode=bytecode)


def load_contract_artifact(
    contract_name: str, artifacts_root: Optional[Union[Path, str]] = None
) -> ContractArtifact:
    """Load the artifact for a contract from the standard artifacts layout."""
    return parse_contract_artifact(get_artifact_path(contract_name, artifacts_root))
