from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.api.schemas import error_responses, paginated_response
from apps.common import get_logger
from apps.common.pagination import StandardPagination
from .container import build_address_service
from .serializers import AddressSerializer

logger = get_logger(__name__).bind(component="users", layer="view")


@extend_schema(tags=["Addresses"])
class AddressListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_address_service()
    log = logger.bind(view="AddressListView")

    @extend_schema(
        summary="List my addresses",
        responses={200: AddressSerializer(many=True), **error_responses(401)},
    )
    def get(self, request):
        data = self.service.list_addresses(request.validated_user_id)
        return Response(AddressSerializer(data, many=True).data)

    @extend_schema(
        summary="Create address",
        request=AddressSerializer,
        responses={201: AddressSerializer, **error_responses(400, 401)},
    )
    def post(self, request):
        serializer = AddressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.create_address(request.validated_user_id, serializer.validated_data)
        self.log.info("Address created via API", user_id=request.validated_user_id, address_id=dto.id)
        return Response(AddressSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Addresses"])
class AddressDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_address_service()
    log = logger.bind(view="AddressDetailView")

    @extend_schema(
        summary="Get address",
        parameters=[OpenApiParameter("address_id", int, OpenApiParameter.PATH)],
        responses={200: AddressSerializer, **error_responses(401, 404)},
    )
    def get(self, request, address_id: int):
        dto = self.service.get_address(request.validated_user_id, address_id)
        return Response(AddressSerializer(dto).data)

    @extend_schema(
        summary="Delete address",
        description="Placed orders keep their own copy of the delivery address.",
        parameters=[OpenApiParameter("address_id", int, OpenApiParameter.PATH)],
        responses={204: None, **error_responses(401, 404)},
    )
    def delete(self, request, address_id: int):
        self.service.delete_address(request.validated_user_id, address_id)
        self.log.info("Address deleted via API", user_id=request.validated_user_id, address_id=address_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Addresses"])
class AddressAllView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_address_service()

    @extend_schema(
        summary="List every address (staff)",
        description="Supports ?page, ?limit, ?sortBy and ?sortOrder=asc|desc.",
        parameters=[
            OpenApiParameter("sortBy", str, required=False),
            OpenApiParameter("sortOrder", str, required=False, enum=["asc", "desc"]),
        ],
        responses={200: paginated_response(AddressSerializer), **error_responses(401, 403)},
    )
    def get(self, request):
        return self.service.list_all_addresses(
            request,
            sort_by=request.query_params.get("sortBy"),
            sort_order=request.query_params.get("sortOrder"),
            paginator_class=StandardPagination,
            serializer_class=AddressSerializer,
            view=self,
        )
