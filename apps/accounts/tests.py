from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient

from apps.accounts.domain.errors import PasswordInvalidError, PhoneInvalidError
from apps.accounts.domain.policies import validate_new_password, validate_phone
from apps.accounts.models import AccountAuditLog, CustomerProfile


def _create_customer(email="shopper@example.com", password="secret123", **profile):
    user = get_user_model().objects.create_user(username=email, email=email, password=password)
    CustomerProfile.objects.create(
        user=user,
        full_name=profile.get("full_name", "Shopper One"),
        phone=profile.get("phone", "0900000001"),
        address=profile.get("address", "1 Main St"),
        role=profile.get("role", CustomerProfile.ROLE_CUSTOMER),
    )
    return user


class AccountPolicyTests(TestCase):
    def test_phone_must_have_ten_or_eleven_digits(self):
        self.assertEqual(validate_phone("090-000-0001"), "0900000001")
        with self.assertRaises(PhoneInvalidError):
            validate_phone("12345")
        self.assertEqual(validate_phone("", required=False), "")

    def test_new_password_rules(self):
        with self.assertRaises(PasswordInvalidError):
            validate_new_password("abc")
        with self.assertRaises(PasswordInvalidError):
            validate_new_password("samepass", old_password="samepass")
        self.assertEqual(validate_new_password("newpass1", old_password="oldpass1"), "newpass1")


class AccountsAuthApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        cache.clear()
        self.client = APIClient()

    def test_register_creates_user_and_profile(self):
        response = self.client.post(
            "/api/auth/register/",
            data={
                "full_name": "New Shopper",
                "email": "New@Example.com",
                "password": "secret123",
                "phone": "0911111111",
                "address": "12 River Rd",
            },
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["user"]["email"], "new@example.com")
        self.assertEqual(payload["user"]["role"], "customer")

        user = get_user_model().objects.get(pk=payload["user"]["user_id"])
        self.assertTrue(user.check_password("secret123"))
        self.assertEqual(user.customer_profile.address, "12 River Rd")
        self.assertTrue(AccountAuditLog.objects.filter(user=user, action=AccountAuditLog.ACTION_REGISTERED).exists())

    def test_register_requires_all_fields(self):
        response = self.client.post(
            "/api/auth/register/",
            data={"full_name": "No Address", "email": "a@example.com", "password": "secret123", "phone": "0900000000"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        payload = response.json()
        self.assertFalse(payload["success"])
        self.assertEqual(payload["message"], "Please fill in all fields")

    def test_register_duplicate_email_conflicts(self):
        _create_customer(email="taken@example.com")
        response = self.client.post(
            "/api/auth/register/",
            data={
                "full_name": "Dup",
                "email": "taken@example.com",
                "password": "secret123",
                "phone": "0900000002",
                "address": "Somewhere",
            },
            format="json",
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["field"], "email")

    def test_login_returns_token_and_user_summary(self):
        user = _create_customer()
        response = self.client.post(
            "/api/auth/login/",
            data={"email": "SHOPPER@example.com", "password": "secret123"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertTrue(payload["token"])
        self.assertTrue(payload["refresh"])
        self.assertEqual(
            payload["user"],
            {
                "user_id": user.id,
                "full_name": "Shopper One",
                "email": "shopper@example.com",
                "phone": "0900000001",
                "address": "1 Main St",
                "role": "customer",
            },
        )

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {payload['token']}")
        profile = self.client.get("/api/user/profile/")
        self.assertEqual(profile.status_code, 200)
        self.assertEqual(profile.json()["user"]["user_id"], user.id)

    def test_login_with_wrong_password_is_rejected_and_audited(self):
        _create_customer()
        response = self.client.post(
            "/api/auth/login/",
            data={"email": "shopper@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()["success"])
        self.assertTrue(AccountAuditLog.objects.filter(action=AccountAuditLog.ACTION_LOGIN_FAILED).exists())

    def test_profile_requires_bearer_token(self):
        response = self.client.get("/api/user/profile/")
        self.assertEqual(response.status_code, 401)
        payload = response.json()
        self.assertFalse(payload["success"])
        self.assertIn("message", payload)


class AccountProfileApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        cache.clear()
        self.user = _create_customer()
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def test_update_profile(self):
        response = self.client.put(
            "/api/user/update-profile/",
            data={
                "full_name": "Renamed Shopper",
                "email": "renamed@example.com",
                "phone": "01234567890",
                "address": "2 Hill St",
            },
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["full_name"], "Renamed Shopper")

        self.user.refresh_from_db()
        self.assertEqual(self.user.email, "renamed@example.com")
        self.assertEqual(self.user.customer_profile.phone, "01234567890")

    def test_update_profile_rejects_bad_phone(self):
        response = self.client.put(
            "/api/user/update-profile/",
            data={"full_name": "X", "email": "shopper@example.com", "phone": "123"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "phone")

    def test_update_profile_rejects_email_of_another_account(self):
        _create_customer(email="other@example.com")
        response = self.client.put(
            "/api/user/update-profile/",
            data={"full_name": "X", "email": "other@example.com"},
            format="json",
        )
        self.assertEqual(response.status_code, 409)

    def test_change_password(self):
        response = self.client.post(
            "/api/user/change-password/",
            data={"oldPassword": "secret123", "newPassword": "newsecret"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("newsecret"))

    def test_change_password_with_wrong_old_password(self):
        response = self.client.post(
            "/api/user/change-password/",
            data={"oldPassword": "nope", "newPassword": "newsecret"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Old password is incorrect.")

    def test_change_password_rejects_reuse(self):
        response = self.client.post(
            "/api/user/change-password/",
            data={"oldPassword": "secret123", "newPassword": "secret123"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "new_password")
