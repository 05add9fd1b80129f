"""Creator payout destination"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BankPayoutMethod:
    bank_name: str
    account_number: str
    account_holder_name: str
    routing_number: Optional[str] = None
    type: str = "bank"

    def __post_init__(self):
        if self.type != "bank":
            raise ValueError("Only bank payouts are supported")
        for name in ("bank_name", "account_number", "account_holder_name"):
            if not getattr(self, name):
                raise ValueError(f"{name} is required")

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape stored on creator profiles and withdrawal snapshots"""
        data = asdict(self)
        return {
            "type": data["type"],
            "bankName": data["bank_name"],
            "accountNumber": data["account_number"],
            "routingNumber": data["routing_number"],
            "accountHolderName": data["account_holder_name"],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["BankPayoutMethod"]:
        if not data:
            return None
        return cls(
            type=data.get("type", "bank"),
            bank_name=data.get("bankName", ""),
            account_number=data.get("accountNumber", ""),
            routing_number=data.get("routingNumber"),
            account_holder_name=data.get("accountHolderName", ""),
        )
