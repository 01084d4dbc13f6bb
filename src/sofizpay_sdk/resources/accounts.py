"""Account resource for SofizPay SDK."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models.balance import Balance
from ..models.errors import NetworkError, NotFoundError, SofizPayError
from .base import LedgerResource


class AccountsResource(LedgerResource):
    """Resource for balance and trustline lookups."""

    def get_dzt_balance(self, account_id: str) -> Optional[Balance]:
        """
        Get the tracked-asset balance of an account.

        Args:
            account_id: Ledger account id

        Returns:
            The balance, or None if the account has no trustline for the asset
        """
        for line in self._fetch_balances(account_id):
            if line.get("asset_type") == "native":
                continue
            if self._asset.matches(line.get("asset_code"), line.get("asset_issuer")):
                return self._to_balance(account_id, line)
        return None

    def get_all_balances(self, account_id: str) -> list[Balance]:
        """
        Get every balance line of an account, native XLM included.

        Args:
            account_id: Ledger account id

        Returns:
            List of balances in ledger order
        """
        return [self._to_balance(account_id, line) for line in self._fetch_balances(account_id)]

    def account_exists(self, account_id: str) -> bool:
        """Check if account exists on the network."""
        try:
            self._ledger.fetch_account(account_id)
        except NotFoundError:
            return False
        except SofizPayError:
            raise
        except Exception as e:
            raise NetworkError(f"Failed to look up account: {e}") from e
        return True

    def has_dzt_trustline(self, account_id: str) -> bool:
        """Check if account has a trustline for the tracked asset."""
        return self.get_dzt_balance(account_id) is not None

    def _fetch_balances(self, account_id: str) -> list[Mapping[str, Any]]:
        try:
            account = self._ledger.fetch_account(account_id)
        except SofizPayError:
            raise
        except Exception as e:
            raise NetworkError(f"Failed to get account balances: {e}") from e
        return list(account.get("balances", []))

    @staticmethod
    def _to_balance(account_id: str, line: Mapping[str, Any]) -> Balance:
        if line.get("asset_type") == "native":
            return Balance(
                account_id=account_id,
                balance=line["balance"],
                asset_code="XLM",
                asset_issuer="native",
                limit=None,
                is_authorized=True,
            )
        return Balance(
            account_id=account_id,
            balance=line["balance"],
            asset_code=line["asset_code"],
            asset_issuer=line["asset_issuer"],
            limit=line.get("limit"),
            is_authorized=bool(line.get("is_authorized", True)),
        )
