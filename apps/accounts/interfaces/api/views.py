from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.application.services.identity_service import AccountIdentityService
from apps.accounts.application.use_cases.change_password import ChangePasswordCommand, ChangePasswordUseCase
from apps.accounts.application.use_cases.login import LoginCommand, LoginUseCase
from apps.accounts.application.use_cases.register_customer import (
    RegisterCustomerCommand,
    RegisterCustomerUseCase,
)
from apps.accounts.application.use_cases.update_profile import UpdateProfileCommand, UpdateProfileUseCase
from apps.accounts.domain.errors import (
    AccountAlreadyExistsError,
    AccountValidationError,
    InvalidCredentialsError,
)
from apps.accounts.interfaces.api.serializers import (
    ChangePasswordSerializer,
    LoginSerializer,
    RegisterSerializer,
    UpdateProfileSerializer,
)
from apps.accounts.services.audit_service import AccountAuditService
from clothing_store.api_errors import error_response


def _success(*, message: str, http_status: int = status.HTTP_200_OK, **data) -> Response:
    return Response({"success": True, "message": message, **data}, status=http_status)


class RegisterAPI(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                message="Please fill in all fields", error=serializer.errors, http_status=status.HTTP_400_BAD_REQUEST
            )

        data = serializer.validated_data
        try:
            result = RegisterCustomerUseCase.execute(
                RegisterCustomerCommand(
                    full_name=data["full_name"],
                    email=data["email"],
                    password=data["password"],
                    phone=data["phone"],
                    address=data["address"],
                )
            )
        except AccountAlreadyExistsError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_409_CONFLICT)
        except AccountValidationError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)

        AccountAuditService.record(
            AccountAuditService.ACTION_REGISTERED, user=result.user, request=request, email=result.user.email
        )
        return _success(
            message="Registration successful",
            user=AccountIdentityService.summary(result.user),
            http_status=status.HTTP_201_CREATED,
        )


class LoginAPI(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                message="Email and password are required", error=serializer.errors, http_status=status.HTTP_400_BAD_REQUEST
            )

        email = serializer.validated_data["email"]

        try:
            result = LoginUseCase.execute(LoginCommand(email=email, password=serializer.validated_data["password"]))
        except InvalidCredentialsError as exc:
            AccountAuditService.record(AccountAuditService.ACTION_LOGIN_FAILED, request=request, email=email)
            return error_response(message=str(exc), http_status=status.HTTP_401_UNAUTHORIZED)

        AccountAuditService.record(AccountAuditService.ACTION_LOGIN_SUCCEEDED, user=result.user, request=request)

        refresh = RefreshToken.for_user(result.user)
        return _success(
            message="Login successful",
            token=str(refresh.access_token),
            refresh=str(refresh),
            user=AccountIdentityService.summary(result.user),
        )


class ProfileAPI(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return _success(message="OK", user=AccountIdentityService.summary(request.user))


class UpdateProfileAPI(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request):
        serializer = UpdateProfileSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(message="Invalid input.", error=serializer.errors, http_status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        try:
            summary = UpdateProfileUseCase.execute(
                UpdateProfileCommand(
                    user=request.user,
                    full_name=data["full_name"],
                    email=data["email"],
                    phone=data.get("phone", ""),
                    address=data.get("address", ""),
                )
            )
        except AccountAlreadyExistsError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_409_CONFLICT)
        except AccountValidationError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)

        return _success(message="Profile updated", user=summary)


class ChangePasswordAPI(APIView):
    permission_classes = [IsAuthenticated]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(message="Invalid input.", error=serializer.errors, http_status=status.HTTP_400_BAD_REQUEST)

        try:
            ChangePasswordUseCase.execute(
                ChangePasswordCommand(
                    user=request.user,
                    old_password=serializer.validated_data["oldPassword"],
                    new_password=serializer.validated_data["newPassword"],
                )
            )
        except InvalidCredentialsError as exc:
            return error_response(message=str(exc), field="oldPassword", http_status=status.HTTP_400_BAD_REQUEST)
        except AccountValidationError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)

        return _success(message="Password changed successfully")
