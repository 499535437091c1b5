"""Farm, party and bank-account seeding service."""

from typing import Optional

from farmledger.database.base import Database
from farmledger.domain.entities import BankAccount, Client, Farm, Supplier
from farmledger.domain.errors import ValidationError


def _require_name(name: str, what: str) -> str:
    if not name or not name.strip():
        raise ValidationError(f"{what} name cannot be empty")
    return name.strip()


class FarmService:
    """Service for the farms, clients, suppliers and bank accounts the ledger runs against."""

    def __init__(self, db: Database):
        """Initialize farm service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_farm(self, name: str, tenant_id: str = "default") -> int:
        """Create a farm.

        Args:
            name: Farm name
            tenant_id: Owning tenant

        Returns:
            Farm ID

        Raises:
            ValidationError: If the name is empty
        """
        return self.db.create_farm(name=_require_name(name, "Farm"), tenant_id=tenant_id)

    def get_farm(self, farm_id: int) -> Optional[Farm]:
        return self.db.get_farm(farm_id)

    def list_farms(self, tenant_id: Optional[str] = None) -> list[Farm]:
        return self.db.list_farms(tenant_id=tenant_id)

    def create_client(self, farm_id: int, name: str, ice: Optional[str] = None) -> int:
        """Create a client of a farm. Returns client ID."""
        return self.db.create_client(farm_id, _require_name(name, "Client"), ice=ice)

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.db.get_client(client_id)

    def create_supplier(self, farm_id: int, name: str, ice: Optional[str] = None) -> int:
        """Create a supplier of a farm. Returns supplier ID."""
        return self.db.create_supplier(farm_id, _require_name(name, "Supplier"), ice=ice)

    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        return self.db.get_supplier(supplier_id)

    def create_bank_account(
        self,
        farm_id: int,
        name: str,
        bank_name: Optional[str] = None,
        rib: Optional[str] = None,
    ) -> int:
        """Create a bank account with a zero balance.

        Args:
            farm_id: Owning farm
            name: Account name
            bank_name: Optional bank name
            rib: Optional RIB (relevé d'identité bancaire)

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty
            NotFoundError: If the farm doesn't exist
        """
        return self.db.create_bank_account(
            farm_id=farm_id, name=_require_name(name, "Account"), bank_name=bank_name, rib=rib
        )

    def get_bank_account(self, account_id: int) -> Optional[BankAccount]:
        return self.db.get_bank_account(account_id)

    def list_bank_accounts(self, farm_id: Optional[int] = None) -> list[BankAccount]:
        return self.db.list_bank_accounts(farm_id=farm_id)
