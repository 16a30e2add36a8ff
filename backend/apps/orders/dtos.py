from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class PaymentDTO:
    id: int
    payment_method: str
    pg_name: str
    pg_payment_id: str
    pg_status: str
    pg_response_message: str


@dataclass
class ShippingAddressDTO:
    address_id: Optional[int]
    street: str
    building_name: str
    city: str
    state: str
    country: str
    zipcode: str


@dataclass
class OrderItemDTO:
    product_id: Optional[int]
    product_name: str
    quantity: int
    discount: str
    ordered_product_price: str


@dataclass
class OrderDTO:
    id: int
    user_id: int
    email: str
    order_date: str
    total_amount: str
    order_status: str
    address: ShippingAddressDTO
    payment: PaymentDTO
    items: List[OrderItemDTO] = field(default_factory=list)
