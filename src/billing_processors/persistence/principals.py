"""Identity adapters between platform accounts and generic principals/groups."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ConnectorPrincipal:
    """
    Principal backed by an account platform connector.

    All persistence calls made for this principal go through its connector,
    so the platform's own permission checks apply.
    """

    connector: Any
    principal_name: str | None = None

    @property
    def name(self) -> str | None:
        return self.principal_name

    def __str__(self) -> str:
        return str(self.principal_name)


@dataclass(frozen=True)
class AccountGroup:
    """
    Group backed by a platform account.

    Membership is read-only and derived from the account hierarchy.
    """

    account: Any
    group_name: str | None = None

    @property
    def name(self) -> str | None:
        return self.group_name

    def is_member(self, principal: Any) -> bool:
        """
        True if principal is a ConnectorPrincipal whose current account is
        this account or one of its parents.
        """
        if not isinstance(principal, ConnectorPrincipal):
            return False
        current_account = principal.connector.get_current_account()
        return bool(current_account.is_account_or_parent_of(self.account))

    def add_member(self, principal: Any) -> bool:
        raise NotImplementedError("Not allowed to modify group membership through this interface.")

    def remove_member(self, principal: Any) -> bool:
        raise NotImplementedError("Not allowed to modify group membership through this interface.")

    def members(self) -> list[Any]:
        raise NotImplementedError("Group members cannot be listed through this interface.")

    def __str__(self) -> str:
        return str(self.group_name)
