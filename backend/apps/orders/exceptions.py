from apps.api.exceptions import BusinessRuleError


class OrderNotFound(BusinessRuleError):
    code = "ORDER_NOT_FOUND"
    default_message = "Order not found"
