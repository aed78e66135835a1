from __future__ import annotations

import logging

from clothing_client.api import ApiClient
from clothing_client.errors import NotLoggedInError
from clothing_client.session import TOKEN_KEY, USER_KEY

logger = logging.getLogger("clothing.client")


class AccountService:
    """Sign-up, sign-in and profile calls that keep the session in sync."""

    def __init__(self, api: ApiClient):
        self.api = api

    def register(self, *, full_name: str, email: str, password: str, phone: str, address: str) -> dict:
        body = self.api.post(
            "auth/register/",
            {"full_name": full_name, "email": email, "password": password, "phone": phone, "address": address},
        )
        return body["user"]

    def login(self, email: str, password: str) -> dict:
        body = self.api.post("auth/login/", {"email": email, "password": password})
        self.api.session.set_item(TOKEN_KEY, body["token"])
        self.api.session.set_item(USER_KEY, body["user"])
        logger.info("client_login", extra={"user_id": body["user"].get("user_id")})
        return body["user"]

    def current_user(self) -> dict:
        user = self.api.session.get_item(USER_KEY)
        if not user:
            raise NotLoggedInError("User not found")
        return user

    def fetch_profile(self) -> dict:
        user = self.api.get("user/profile/")["user"]
        self.api.session.set_item(USER_KEY, user)
        return user

    def update_profile(self, *, full_name: str, email: str, phone: str = "", address: str = "") -> dict:
        body = self.api.put(
            "user/update-profile/",
            {"full_name": full_name, "email": email, "phone": phone, "address": address},
        )
        self.api.session.set_item(USER_KEY, body["user"])
        return body["user"]

    def change_password(self, old_password: str, new_password: str) -> str:
        body = self.api.post("user/change-password/", {"oldPassword": old_password, "newPassword": new_password})
        return body.get("message", "")

    def logout(self) -> None:
        self.api.session.clear()
