from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.api.principal import principal_from_request
from apps.api.schemas import ErrorResponseSerializer, ValidationErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_registration_service, build_session_service
from .serializers import (
    RegisterRequestSerializer,
    RegisterResponseSerializer,
    SessionResponseSerializer,
    LogoutRequestSerializer,
    DetailResponseSerializer,
)
from .services import InvalidRefreshTokenError, RegistrationConflictError

logger = get_logger(__name__).bind(component="auth", layer="view")


@extend_schema(tags=["Auth"])
class AuthRegisterView(APIView):
    permission_classes = [AllowAny]
    service = build_registration_service()
    log = logger.bind(view="AuthRegisterView")

    @extend_schema(
        summary="Register user",
        description="Creates the user record used by subsequent sign-ins.",
        request=RegisterRequestSerializer,
        responses={
            201: RegisterResponseSerializer,
            400: OpenApiResponse(response=ValidationErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Processing registration request",
            username=serializer.validated_data.get("username"),
        )
        try:
            dto = self.service.register(serializer.validated_data)
        except RegistrationConflictError as exc:
            self.log.warning("Registration failed", field=exc.field)
            return error_response(
                "VALIDATION_ERROR",
                str(exc),
                [{"field": exc.field, "message": f"A user with that {exc.field} already exists."}],
            )
        self.log.info("Registration completed", user_id=dto.id)
        return Response(
            RegisterResponseSerializer(dto).data, status=status.HTTP_201_CREATED
        )


@extend_schema(tags=["Auth"], summary="Login (JWT obtain pair)")
class LoginView(TokenObtainPairView):
    permission_classes = [AllowAny]


@extend_schema(tags=["Auth"], summary="Refresh JWT")
class RefreshView(TokenRefreshView):
    permission_classes = [AllowAny]


@extend_schema(tags=["Auth"])
class AuthSessionView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_session_service()
    log = logger.bind(view="AuthSessionView")

    @extend_schema(
        summary="Current session",
        description="Profile of the authenticated principal.",
        responses={
            200: SessionResponseSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        principal = principal_from_request(request)
        dto = self.service.current_user(principal) if principal else None
        if dto is None:
            return error_response("UNAUTHORIZED", "Unauthorized")
        self.log.debug("Returning session profile", user_id=dto.id)
        return Response(SessionResponseSerializer({"user": dto}).data)


@extend_schema(tags=["Auth"])
class LogoutView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_session_service()
    log = logger.bind(view="LogoutView")

    @extend_schema(
        summary="Logout (blacklist refresh)",
        request=LogoutRequestSerializer,
        responses={
            200: DetailResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = LogoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        principal = principal_from_request(request)
        try:
            self.service.logout(serializer.validated_data["refresh"], principal)
        except InvalidRefreshTokenError as exc:
            return error_response("VALIDATION_ERROR", "Invalid token", {"reason": str(exc)})
        return Response({"detail": "Logged out"}, status=status.HTTP_200_OK)
