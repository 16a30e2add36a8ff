from apps.api.exceptions import BusinessRuleError


class ProductNotFound(BusinessRuleError):
    code = "PRODUCT_NOT_FOUND"
    default_message = "Product not found"


class CategoryNotFound(BusinessRuleError):
    code = "NOT_FOUND"
    default_message = "Category not found"
