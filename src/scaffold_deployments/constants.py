"""Configuration constants for scaffold-deployments library."""

# Known networks. Unknown networks work too, given an explicit RPC URL.
NETWORK_CONFIG = {
    "localhost": {
        "chain_id": 31337,
        "chain_name": "Hardhat Localhost",
        "default_rpc_url": "http://127.0.0.1:8545",
        "default_rpc_env": "LOCALHOST_RPC_URL",
    },
    "hardhat": {
        "chain_id": 31337,
        "chain_name": "Hardhat Network",
        "default_rpc_url": "http://127.0.0.1:8545",
        "default_rpc_env": "HARDHAT_RPC_URL",
    },
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "default_rpc_url": None,
        "default_rpc_env": "SEPOLIA_RPC_URL",
    },
    "mainnet": {
        "chain_id": 1,
        "chain_name": "Ethereum Mainnet",
        "default_rpc_url": None,
        "default_rpc_env": "MAINNET_RPC_URL",
    },
}

DEFAULT_NETWORK = "localhost"

# hardhat-deploy style named accounts: role -> {network or "default": index or address}
DEFAULT_NAMED_ACCOUNTS = {
    "deployer": {"default": 0},
}

DEFAULT_SIGNER_ROLE = "deployer"

DEFAULT_CHECKS = ("greeting",)

# Seconds
DEFAULT_CONFIRMATION_TIMEOUT = 120.0
DEFAULT_POLL_INTERVAL = 0.5
DEFAULT_RPC_TIMEOUT = 30

# Written next to the per-contract files, as hardhat-deploy does
CHAIN_ID_FILENAME = ".chainId"
