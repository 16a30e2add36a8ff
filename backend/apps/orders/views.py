from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.api.schemas import error_responses
from apps.common import get_logger
from .container import build_checkout_service, build_order_service
from .serializers import OrderReadSerializer, PlaceOrderRequestSerializer

logger = get_logger(__name__).bind(component="orders", layer="view")


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    permission_classes = [IsAuthenticated]
    checkout = build_checkout_service()
    service = build_order_service()
    log = logger.bind(view="OrderListView")

    @extend_schema(
        summary="List my orders",
        description="Newest first.",
        responses={200: OrderReadSerializer(many=True), **error_responses(401)},
    )
    def get(self, request):
        data = self.service.list_orders_for_user(request.validated_user_id)
        return Response(OrderReadSerializer(data, many=True).data)

    @extend_schema(
        summary="Place order from my cart",
        description=(
            "Converts the cart into an order, decrements stock and empties the cart. "
            "Gateway fields are stored as supplied."
        ),
        request=PlaceOrderRequestSerializer,
        responses={201: OrderReadSerializer, **error_responses(400, 401, 404, 409, 503)},
    )
    def post(self, request):
        serializer = PlaceOrderRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.checkout.place_order(request.validated_user_id, serializer.validated_data)
        self.log.info(
            "Order placed via API",
            user_id=request.validated_user_id,
            order_id=dto.id,
            total=dto.total_amount,
        )
        return Response(OrderReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Orders"])
class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()

    @extend_schema(
        summary="Get order",
        parameters=[OpenApiParameter("order_id", int, OpenApiParameter.PATH)],
        responses={200: OrderReadSerializer, **error_responses(401, 404)},
    )
    def get(self, request, order_id: int):
        dto = self.service.get_order(
            request.validated_user_id,
            order_id,
            is_privileged=bool(getattr(request, "is_privileged_user", False)),
        )
        return Response(OrderReadSerializer(dto).data)
