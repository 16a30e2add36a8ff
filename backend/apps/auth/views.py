from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_spectacular.utils import extend_schema

from apps.api.schemas import error_responses
from apps.common import get_logger
from apps.users.serializers import UserSerializer
from .container import build_registration_service, build_session_service
from .serializers import (
    DetailResponseSerializer,
    LogoutRequestSerializer,
    MeResponseSerializer,
    RegisterRequestSerializer,
)

logger = get_logger(__name__).bind(component="auth", layer="view")


@extend_schema(tags=["Auth"])
class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    service = build_registration_service()
    log = logger.bind(view="RegisterView")

    @extend_schema(
        summary="Register user",
        request=RegisterRequestSerializer,
        responses={201: UserSerializer, **error_responses(400)},
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.register(serializer.validated_data)
        self.log.info("Registration completed", user_id=dto.id)
        return Response(UserSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Auth"], summary="Login (JWT obtain pair)")
class LoginView(TokenObtainPairView):
    permission_classes = [AllowAny]


@extend_schema(tags=["Auth"], summary="Refresh JWT")
class RefreshView(TokenRefreshView):
    permission_classes = [AllowAny]


@extend_schema(tags=["Auth"])
class MeView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_registration_service()

    @extend_schema(summary="Current user", responses={200: MeResponseSerializer, **error_responses(401)})
    def get(self, request):
        dto = self.service.profile(request.validated_user_id)
        return Response(MeResponseSerializer(dto).data)


@extend_schema(tags=["Auth"])
class LogoutView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_session_service()

    @extend_schema(
        summary="Logout (blacklist refresh token)",
        request=LogoutRequestSerializer,
        responses={200: DetailResponseSerializer, **error_responses(400, 401)},
    )
    def post(self, request):
        self.service.logout(request.data.get("refresh"), getattr(request.user, "id", None))
        return Response({"detail": "Logged out"}, status=status.HTTP_200_OK)
