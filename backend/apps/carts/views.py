from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.api.schemas import error_responses
from apps.common import get_logger
from .container import build_cart_service
from .serializers import CartReadSerializer

logger = get_logger(__name__).bind(component="carts", layer="view")

PRODUCT_ID_PARAM = OpenApiParameter("product_id", int, OpenApiParameter.PATH)


@extend_schema(tags=["Carts"])
class CartListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()

    @extend_schema(
        summary="List every cart (staff)",
        responses={200: CartReadSerializer(many=True), **error_responses(401, 403)},
    )
    def get(self, request):
        data = self.service.list_carts()
        return Response(CartReadSerializer(data, many=True).data)


@extend_schema(tags=["Carts"])
class UserCartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="UserCartView")

    @extend_schema(
        summary="Get my cart",
        responses={200: CartReadSerializer, **error_responses(401, 404)},
    )
    def get(self, request):
        dto = self.service.get_cart_for_user(request.validated_user_id)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Clear my cart",
        description="Removes every line. Calling it on an empty or missing cart is not an error.",
        responses={204: None, **error_responses(401)},
    )
    def delete(self, request):
        removed = self.service.clear_cart(request.validated_user_id)
        self.log.info("Cart cleared via API", user_id=request.validated_user_id, lines_removed=removed)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Carts"])
class CartItemAddView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemAddView")

    @extend_schema(
        summary="Add product to my cart",
        description="Creates the cart on first use. Each product can only be added once.",
        request=None,
        parameters=[PRODUCT_ID_PARAM, OpenApiParameter("quantity", int, OpenApiParameter.PATH)],
        responses={201: CartReadSerializer, **error_responses(400, 401, 404, 409)},
    )
    def post(self, request, product_id: int, quantity: int):
        quantity = getattr(request, "cart_quantity", quantity)
        dto = self.service.add_line(request.validated_user_id, product_id, quantity)
        self.log.info(
            "Cart line added via API",
            user_id=request.validated_user_id,
            product_id=product_id,
            quantity=quantity,
        )
        return Response(CartReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Carts"])
class CartItemQuantityView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()

    @extend_schema(
        summary="Change quantity by one",
        description="operation is 'add' (+1) or 'delete' (-1). A line reaching zero is removed.",
        request=None,
        parameters=[
            PRODUCT_ID_PARAM,
            OpenApiParameter("operation", str, OpenApiParameter.PATH, enum=["add", "delete"]),
        ],
        responses={200: CartReadSerializer, **error_responses(400, 401, 404, 409)},
    )
    def put(self, request, product_id: int, operation: str):
        dto = self.service.adjust_line_quantity(
            request.validated_user_id, product_id, request.quantity_delta
        )
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Carts"])
class CartItemDeleteView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()

    @extend_schema(
        summary="Remove product from my cart",
        parameters=[PRODUCT_ID_PARAM],
        responses={200: CartReadSerializer, **error_responses(401, 404)},
    )
    def delete(self, request, product_id: int):
        dto = self.service.remove_line(request.validated_user_id, product_id)
        return Response(CartReadSerializer(dto).data)
