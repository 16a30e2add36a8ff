from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class PlaceOrderCommand:
    address_id: int
    payment_method: str
    pg_name: str
    pg_payment_id: str
    pg_status: str
    pg_response_message: str = ""

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "PlaceOrderCommand":
        data = dict(payload or {})
        return PlaceOrderCommand(
            address_id=int(data["address_id"]),
            payment_method=str(data.get("payment_method", "")),
            pg_name=str(data.get("pg_name", "")),
            pg_payment_id=str(data.get("pg_payment_id", "")),
            pg_status=str(data.get("pg_status", "")),
            pg_response_message=str(data.get("pg_response_message") or ""),
        )

    def payment_fields(self) -> Dict[str, str]:
        return {
            "payment_method": self.payment_method,
            "pg_name": self.pg_name,
            "pg_payment_id": self.pg_payment_id,
            "pg_status": self.pg_status,
            "pg_response_message": self.pg_response_message,
        }
