"""Path management utilities for scaffold-deployments library."""

from pathlib import Path
from typing import Optional, Union


def get_default_project_root() -> Path:
    """
    Get default project root (current working directory).

    Returns:
        Absolute path of the working directory
    """
    return Path.cwd()


def get_project_paths(project_root: Optional[Union[Path, str]] = None) -> tuple[Path, Path]:
    """
    Get the artifact and deployment directories of a hardhat project.

    Args:
        project_root: Project directory (defaults to the working directory)

    Returns:
        Tuple of (artifacts_dir, deployments_dir)
    """
    if project_root is None:
        project_root = get_default_project_root()
    else:
        project_root = Path(project_root).absolute()

    artifacts_dir = project_root / "artifacts"
    deployments_dir = project_root / "deployments"

    return (artifacts_dir, deployments_dir)


def get_deployment_path(deployments_dir: Path, network: str, contract_name: str) -> Path:
    """Path of the persisted record for one (network, contract) key."""
    return deployments_dir / network / f"{contract_name}.json"
