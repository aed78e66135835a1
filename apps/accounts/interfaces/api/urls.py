from django.urls import path

from .views import ChangePasswordAPI, LoginAPI, ProfileAPI, RegisterAPI, UpdateProfileAPI

urlpatterns = [
    path("auth/register/", RegisterAPI.as_view(), name="api_auth_register"),
    path("auth/login/", LoginAPI.as_view(), name="api_auth_login"),
    path("user/profile/", ProfileAPI.as_view(), name="api_user_profile"),
    path("user/update-profile/", UpdateProfileAPI.as_view(), name="api_user_update_profile"),
    path("user/change-password/", ChangePasswordAPI.as_view(), name="api_user_change_password"),
]
