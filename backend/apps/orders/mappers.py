from typing import Iterable, List

from apps.common.money import money_str

from .dtos import OrderDTO, OrderItemDTO, PaymentDTO, ShippingAddressDTO
from .models import Order


class OrderMapper:
    @staticmethod
    def to_dto(order: Order) -> OrderDTO:
        payment = order.payment
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            email=order.email,
            order_date=order.order_date.isoformat(),
            total_amount=money_str(order.total_amount),
            order_status=order.order_status,
            address=ShippingAddressDTO(
                address_id=order.address_id,
                street=order.shipping_street,
                building_name=order.shipping_building_name,
                city=order.shipping_city,
                state=order.shipping_state,
                country=order.shipping_country,
                zipcode=order.shipping_zipcode,
            ),
            payment=PaymentDTO(
                id=payment.id,
                payment_method=payment.payment_method,
                pg_name=payment.pg_name,
                pg_payment_id=payment.pg_payment_id,
                pg_status=payment.pg_status,
                pg_response_message=payment.pg_response_message,
            ),
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    discount=money_str(item.discount),
                    ordered_product_price=money_str(item.ordered_product_price),
                )
                for item in order.items.all()
            ],
        )

    @staticmethod
    def many_to_dto(orders: Iterable[Order]) -> List[OrderDTO]:
        return [OrderMapper.to_dto(o) for o in orders]
