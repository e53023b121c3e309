"""Artifact and deployment file parsers for scaffold-deployments library."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import RegistryError
from .types import ContractArtifact, DeploymentRecord


def parse_hardhat_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a hardhat compilation artifact.

    Args:
        file_path: Path to artifacts/<source>/<Name>.json

    Returns:
        ContractArtifact with abi and creation bytecode

    Raises:
        KeyError: If the file lacks abi or bytecode
        json.JSONDecodeError: If the file is not JSON
    """
    with open(file_path) as f:
        data = json.load(f)

    bytecode = data["bytecode"]
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return ContractArtifact(
        contract_name=data.get("contractName", file_path.stem),
        abi=data["abi"],
        bytecode=bytecode,
        deployed_bytecode=data.get("deployedBytecode"),
        source_name=data.get("sourceName"),
    )


def parse_hardhat_deployment(
    file_path: Path, network: str, contract_name: Optional[str] = None
) -> DeploymentRecord:
    """
    Parse a hardhat-deploy style deployment file.

    Args:
        file_path: Path to deployments/<network>/<Name>.json
        network: Network the file belongs to
        contract_name: Registry key of the record (defaults to the file stem)

    Returns:
        DeploymentRecord (fingerprint is "" for files written by other tools)

    Raises:
        RegistryError: If the file is unreadable, has no address or a malformed receipt
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RegistryError(f"Corrupted deployment file: {file_path}") from e

    if not isinstance(data, dict) or "address" not in data:
        raise RegistryError(f"Missing address in deployment file: {file_path}")

    receipt = data.get("receipt") or {}
    if not isinstance(receipt, dict):
        raise RegistryError(f"Malformed receipt in deployment file: {file_path}")

    # Try to get block number from receipt first, fall back to top-level
    block_number = receipt.get("blockNumber", data.get("blockNumber"))

    return DeploymentRecord(
        contract_name=contract_name or file_path.stem,
        address=data["address"],
        fingerprint=data.get("fingerprint", ""),
        network=network,
        transaction_hash=data.get("transactionHash"),
        block_number=block_number,
        deployer=receipt.get("from"),
        constructor_args=data.get("args"),
        abi=data.get("abi"),
        bytecode=data.get("bytecode"),
        num_deployments=data.get("numDeployments", 1),
    )


def serialize_deployment_record(record: DeploymentRecord) -> Dict[str, Any]:
    """
    Convert a record to the hardhat-deploy file layout.

    Optional fields are omitted when unset.
    """
    result: Dict[str, Any] = {
        "address": record.address,
        "fingerprint": record.fingerprint,
        "numDeployments": record.num_deployments,
    }

    if record.abi is not None:
        result["abi"] = record.abi
    if record.transaction_hash is not None:
        result["transactionHash"] = record.transaction_hash

    receipt: Dict[str, Any] = {}
    if record.block_number is not None:
        receipt["blockNumber"] = record.block_number
    if record.deployer is not None:
        receipt["from"] = record.deployer
    if record.transaction_hash is not None:
        receipt["transactionHash"] = record.transaction_hash
    if receipt:
        receipt["contractAddress"] = record.address
        result["receipt"] = receipt

    if record.constructor_args is not None:
        result["args"] = list(record.constructor_args)
    if record.bytecode is not None:
        result["bytecode"] = record.bytecode

    return result
