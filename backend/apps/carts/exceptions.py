from apps.api.exceptions import BusinessRuleError


class NoActiveCart(BusinessRuleError):
    code = "NO_ACTIVE_CART"
    default_message = "No cart exists for this user"


class EmptyCart(BusinessRuleError):
    code = "EMPTY_CART"
    default_message = "Cart is empty"


class DuplicateItem(BusinessRuleError):
    code = "DUPLICATE_ITEM"
    default_message = "Product already exists in the cart"


class ItemNotInCart(BusinessRuleError):
    code = "ITEM_NOT_IN_CART"
    default_message = "Product is not in the cart"


class AlreadyZero(BusinessRuleError):
    code = "ALREADY_ZERO"
    default_message = "Product quantity is already zero"


class InvalidQuantity(BusinessRuleError):
    code = "VALIDATION_ERROR"
    default_message = "Quantity can only change by one unit at a time"
