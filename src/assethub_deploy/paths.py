"""Path management utilities for assethub-deploy."""

from pathlib import Path
from typing import Optional, Union

from .constants import DEFAULT_ARTIFACTS_DIR


def get_default_artifacts_dir() -> Path:
    """
    Get default artifacts directory.

    Returns:
        Path to ./artifacts-pvm
    """
    return Path.cwd() / DEFAULT_ARTIFACTS_DIR


def get_artifact_path(
    contract_name: str, artifacts_root: Optional[Union[Path, str]] = None
) -> Path:
    """
    Get the compiled artifact path for a contract.

    Args:
        contract_name: Contract name, e.g. "DividendToken"
        artifacts_root: Custom artifacts directory (defaults to ./artifacts-pvm)

    Returns:
        Path to {artifacts_root}/contracts/{name}.sol/{name}.json
    """
    if artifacts_root is None:
        artifacts_root = get_default_artifacts_dir()
    else:
        artifacts_root = Path(artifacts_root).absolute()

    return artifacts_root / "contracts" / f"{contract_name}.sol" / f"{contract_name}.json"
