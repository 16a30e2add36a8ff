from apps.api.exceptions import BusinessRuleError


class OutOfStock(BusinessRuleError):
    code = "OUT_OF_STOCK"
    default_message = "Product is out of stock"


class InsufficientStock(BusinessRuleError):
    code = "INSUFFICIENT_STOCK"
    default_message = "Not enough stock for the requested quantity"

    def __init__(self, product_id: int, requested: int, available=None, product_name=None):
        label = product_name or f"product {product_id}"
        details = {"productId": str(product_id), "requested": requested}
        if available is not None:
            details["available"] = available
        super().__init__(
            f"Not enough stock for {label}: requested {requested}",
            details=details,
        )
        self.product_id = product_id
