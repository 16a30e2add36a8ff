from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.api.exceptions import ApplicationError
from apps.api.schemas import error_responses, paginated_response
from apps.common import get_logger
from apps.common.pagination import StandardPagination
from .container import build_product_service, build_category_service
from .serializers import CategorySerializer, ProductReadSerializer, ProductWriteSerializer

logger = get_logger(__name__).bind(component="catalog", layer="view")


def _int_param(request, name):
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ApplicationError(
            "VALIDATION_ERROR", f"{name} must be an integer", details={name: raw}
        )


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        summary="List products",
        description="Supports ?page, ?limit, ?categoryId, ?sortBy and ?sortOrder=asc|desc.",
        parameters=[
            OpenApiParameter("categoryId", int, required=False),
            OpenApiParameter("sortBy", str, required=False),
            OpenApiParameter("sortOrder", str, required=False, enum=["asc", "desc"]),
        ],
        responses={200: paginated_response(ProductReadSerializer), **error_responses(400, 404)},
    )
    def get(self, request):
        return self.service.list_products_paginated(
            request,
            category_id=_int_param(request, "categoryId"),
            sort_by=request.query_params.get("sortBy"),
            sort_order=request.query_params.get("sortOrder"),
            paginator_class=StandardPagination,
            serializer_class=ProductReadSerializer,
            view=self,
        )

    @extend_schema(
        summary="Create product (staff)",
        request=ProductWriteSerializer,
        responses={201: ProductReadSerializer, **error_responses(400, 401, 403)},
    )
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.create_product(serializer.validated_data)
        self.log.info("Product created via API", product_id=dto.id)
        return Response(ProductReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={200: ProductReadSerializer, **error_responses(404)},
    )
    def get(self, request, product_id: int):
        return Response(ProductReadSerializer(self.service.get_product(product_id)).data)

    def _update(self, request, product_id: int, partial: bool):
        serializer = ProductWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        dto = self.service.update_product(product_id, serializer.validated_data, partial=partial)
        self.log.info("Product updated via API", product_id=product_id, partial=partial)
        return Response(ProductReadSerializer(dto).data)

    @extend_schema(
        summary="Replace product (staff)",
        description="A new price or discount re-prices every cart holding the product.",
        request=ProductWriteSerializer,
        responses={200: ProductReadSerializer, **error_responses(400, 401, 403, 404)},
    )
    def put(self, request, product_id: int):
        return self._update(request, product_id, partial=False)

    @extend_schema(
        summary="Update product (staff)",
        request=ProductWriteSerializer,
        responses={200: ProductReadSerializer, **error_responses(400, 401, 403, 404)},
    )
    def patch(self, request, product_id: int):
        return self._update(request, product_id, partial=True)

    @extend_schema(
        summary="Delete product (staff)",
        description="Removes the product from every cart; placed orders keep their items.",
        responses={204: None, **error_responses(401, 403, 404)},
    )
    def delete(self, request, product_id: int):
        self.service.delete_product(product_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    service = build_category_service()

    @extend_schema(summary="List categories", responses={200: CategorySerializer(many=True)})
    def get(self, request):
        return Response(CategorySerializer(self.service.list_categories(), many=True).data)

    @extend_schema(
        summary="Create category (staff)",
        request=CategorySerializer,
        responses={201: CategorySerializer, **error_responses(400, 401, 403)},
    )
    def post(self, request):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.create_category(serializer.validated_data)
        return Response(CategorySerializer(dto).data, status=status.HTTP_201_CREATED)
