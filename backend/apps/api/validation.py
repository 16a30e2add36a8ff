import json
from typing import Any, Dict, Optional

from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed as DRFAuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.utils import error_response
from apps.users.models import User
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

_jwt_authenticator = JWTAuthentication()

QUANTITY_OPERATIONS = {"add": 1, "delete": -1}

# view name -> methods that need an authenticated caller
AUTHENTICATED_VIEWS = {
    "UserCartView": ("GET", "DELETE"),
    "CartItemAddView": ("POST",),
    "CartItemQuantityView": ("PUT",),
    "CartItemDeleteView": ("DELETE",),
    "OrderListView": ("GET", "POST"),
    "OrderDetailView": ("GET",),
    "AddressListView": ("GET", "POST"),
    "AddressDetailView": ("GET", "DELETE"),
    "MeView": ("GET",),
}

# view name -> methods reserved for staff accounts
STAFF_VIEWS = {
    "CartListView": ("GET",),
    "AddressAllView": ("GET",),
    "ProductListView": ("POST",),
    "ProductDetailView": ("PUT", "PATCH", "DELETE"),
    "CategoryListView": ("POST",),
}


def _is_authenticated_user(request: HttpRequest) -> bool:
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return True

    # Middleware runs before DRF authentication, so resolve the bearer token here
    meta = getattr(request, "META", {}) or {}
    if not meta.get("HTTP_AUTHORIZATION"):
        return False

    try:
        authenticated = _jwt_authenticator.authenticate(request)
    except (InvalidToken, DRFAuthenticationFailed) as exc:
        logger.warning("JWT authentication failed", detail=str(exc))
        return False

    if not authenticated:
        return False

    user, token = authenticated
    if not getattr(user, "is_authenticated", False) or not getattr(user, "id", None):
        return False

    request.user = user
    request.auth = token
    logger.debug("Authenticated user from bearer token", user_id=user.id)
    return True


def _is_privileged_user(user: Any) -> bool:
    return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))


def _set_validated_user(request: HttpRequest, user_id: Optional[int]) -> None:
    request.validated_user_id = user_id
    request.is_privileged_user = _is_privileged_user(getattr(request, "user", None))


def _extract_request_data(request: HttpRequest) -> Dict[str, Any]:
    if request.content_type == "application/json":
        try:
            body = request.body.decode("utf-8")
            payload = json.loads(body) if body else {}
        except (ValueError, UnicodeDecodeError):
            return {}
        return payload if isinstance(payload, dict) else {}
    post = getattr(request, "POST", None)
    return post.dict() if post is not None else {}


def _validate_user_uniqueness(request: HttpRequest) -> Any:
    data = _extract_request_data(request)
    username = data.get("username")
    email = data.get("email")
    if username and User.objects.filter(username=username).exists():
        logger.info("Username uniqueness validation failed", username=username)
        return error_response(
            "VALIDATION_ERROR",
            "Username already exists",
            {"field": "username", "value": username},
        )
    if email and User.objects.filter(email=email).exists():
        logger.info("Email uniqueness validation failed", email=email)
        return error_response(
            "VALIDATION_ERROR",
            "Email already exists",
            {"field": "email", "value": email},
        )
    return None


def _require_user(request: HttpRequest, view_name: str) -> Any:
    if not _is_authenticated_user(request):
        logger.warning("Authentication required", view=view_name, method=request.method)
        return error_response("UNAUTHORIZED", "Authentication required")
    _set_validated_user(request, int(request.user.id))
    return None


def _require_staff(request: HttpRequest, view_name: str) -> Any:
    response = _require_user(request, view_name)
    if response is not None:
        return response
    if not request.is_privileged_user:
        logger.warning(
            "Staff access required",
            view=view_name,
            method=request.method,
            user_id=request.validated_user_id,
        )
        return error_response(
            "FORBIDDEN", "You do not have permission to perform this action"
        )
    return None


def _validate_cart_path(request: HttpRequest, view_name: str, view_kwargs) -> Any:
    if view_name == "CartItemAddView":
        quantity = view_kwargs.get("quantity")
        if not isinstance(quantity, int) or quantity <= 0:
            logger.warning("Rejected non-positive quantity", quantity=quantity)
            return error_response(
                "VALIDATION_ERROR",
                "quantity must be a positive integer",
                {"quantity": str(quantity)},
            )
        request.cart_quantity = quantity
    elif view_name == "CartItemQuantityView":
        operation = str(view_kwargs.get("operation", "")).lower()
        if operation not in QUANTITY_OPERATIONS:
            logger.warning("Unknown quantity operation", operation=operation)
            return error_response(
                "VALIDATION_ERROR",
                "operation must be one of: add, delete",
                {"operation": view_kwargs.get("operation")},
            )
        request.quantity_delta = QUANTITY_OPERATIONS[operation]
    return None


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Request level checks that run before the view.

    Returns an error Response when the request is rejected; otherwise None,
    with ``validated_user_id``/``is_privileged_user`` and any parsed path
    values attached to the request.
    """
    view_name = getattr(view_class, "__name__", "")
    method = getattr(request, "method", "")

    logger.debug("Running request context validation", view=view_name, method=method)

    if method in STAFF_VIEWS.get(view_name, ()):
        response = _require_staff(request, view_name)
        if response is not None:
            return response
    elif method in AUTHENTICATED_VIEWS.get(view_name, ()):
        response = _require_user(request, view_name)
        if response is not None:
            return response
    elif view_name == "RegisterView" and method == "POST":
        response = _validate_user_uniqueness(request)
        if response is not None:
            return response

    return _validate_cart_path(request, view_name, view_kwargs or {})
