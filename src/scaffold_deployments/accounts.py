"""Named account resolution for scaffold-deployments library."""

from typing import List, Optional, Union

from eth_utils import is_address, to_checksum_address

from .constants import DEFAULT_NAMED_ACCOUNTS
from .exceptions import ConfigurationError, RpcError
from .types import NamedAccounts, SignerIdentity


class AccountResolver:
    """
    Maps logical roles ("deployer") to signing accounts.

    Entries follow hardhat-deploy's namedAccounts: an integer is an index into
    the node's eth_accounts list, a string is an explicit address. A role may
    hold a single entry or a per-network mapping with an optional "default".
    """

    def __init__(
        self,
        network: str,
        named_accounts: Optional[NamedAccounts] = None,
        client=None,
    ):
        """
        Initialize the resolver.

        Args:
            network: Active network name
            named_accounts: Role configuration (defaults to deployer = account 0)
            client: JsonRpcClient used to list node accounts for index entries
        """
        self.network = network
        self.named_accounts = (
            DEFAULT_NAMED_ACCOUNTS if named_accounts is None else named_accounts
        )
        self._client = client
        self._node_accounts: Optional[List[str]] = None

    def _entry_for(self, role: str) -> Union[int, str]:
        if role not in self.named_accounts:
            raise ConfigurationError(f"Unknown signer role '{role}'")

        entry = self.named_accounts[role]
        if isinstance(entry, dict):
            if self.network in entry:
                return entry[self.network]
            if "default" in entry:
                return entry["default"]
            raise ConfigurationError(
                f"No account configured for role '{role}' on network '{self.network}'"
            )
        return entry

    def _accounts(self) -> List[str]:
        if self._node_accounts is None:
            if self._client is None:
                raise ConfigurationError(
                    "Account indices need an RPC client to list node accounts"
                )
            try:
                self._node_accounts = self._client.accounts()
            except RpcError as e:
                raise ConfigurationError(f"Cannot list node accounts: {e}") from e
        return self._node_accounts

    def resolve(self, role: str) -> SignerIdentity:
        """
        Resolve a role to a signer.

        Args:
            role: Logical role name, e.g. "deployer"

        Returns:
            SignerIdentity with a checksummed address

        Raises:
            ConfigurationError: If the role is unknown, has no entry for the
                active network, or the entry does not name a usable account
        """
        entry = self._entry_for(role)

        # bool is an int subclass; reject it explicitly
        if isinstance(entry, int) and not isinstance(entry, bool):
            accounts = self._accounts()
            if entry < 0 or entry >= len(accounts):
                raise ConfigurationError(
                    f"Account index {entry} for role '{role}' is out of range "
                    f"(node exposes {len(accounts)} account(s) on '{self.network}')"
                )
            address = accounts[entry]
        elif isinstance(entry, str):
            address = entry
        else:
            raise ConfigurationError(f"Invalid account entry for role '{role}': {entry!r}")

        if not is_address(address):
            raise ConfigurationError(f"Invalid address for role '{role}': {address}")

        return SignerIdentity(role=role, address=to_checksum_address(address))
