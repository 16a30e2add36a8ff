from apps.api.exceptions import BusinessRuleError


class AddressNotFound(BusinessRuleError):
    code = "ADDRESS_NOT_FOUND"
    default_message = "Address not found"
