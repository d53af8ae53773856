import pytest
from django.contrib.auth import get_user_model
from django.core.management import CommandError, call_command
from django.test import TestCase
from rest_framework.test import APIClient

User = get_user_model()


class EffectiveRoleTests(TestCase):
    def test_new_users_are_vendors(self):
        u = User.objects.create_user(username="v", email="v@example.com", password="x")
        self.assertEqual(u.effective_role, "vendor")
        self.assertTrue(u.is_vendor)
        self.assertFalse(u.is_kyc_admin)

    def test_staff_and_superusers_are_admins(self):
        staff = User.objects.create_user(username="s", email="s@example.com", password="x", is_staff=True)
        su = User.objects.create_superuser(username="root", email="r@example.com", password="x")
        for u in (staff, su):
            self.assertEqual(u.effective_role, "admin")
            self.assertTrue(u.is_kyc_admin)
            self.assertEqual(u.role_label, "Admin")

    def test_unknown_role_falls_back_to_vendor(self):
        u = User(username="odd", role="driver")
        self.assertEqual(u.effective_role, "vendor")


class SetRoleCommandTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="alice", email="a@example.com", password="x")

    def test_promotes_to_admin(self):
        call_command("set_role", "alice", "admin")
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, "admin")

    def test_dry_run_leaves_role(self):
        call_command("set_role", "alice", "admin", "--dry-run")
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, "vendor")

    def test_unknown_user(self):
        with self.assertRaises(CommandError):
            call_command("set_role", "bob", "admin")


@pytest.mark.django_db
def test_register_creates_vendor_and_logs_in(client):
    resp = client.post(
        "/register/",
        {
            "username": "newvendor",
            "email": "new@example.com",
            "full_name": "New Vendor",
            "password1": "a-Long-passw0rd!",
            "password2": "a-Long-passw0rd!",
        },
    )
    assert resp.status_code == 302
    assert resp["Location"] == "/dashboard/"
    user = User.objects.get(username="newvendor")
    assert user.role == "vendor"
    assert client.get("/dashboard/").status_code == 200


@pytest.mark.django_db
def test_me_endpoint_reports_role():
    admin = User.objects.create_user(username="A1", email="a1@example.com", password="x", role="admin")
    client = APIClient()
    client.force_authenticate(user=admin)
    resp = client.get("/apis/v1/users/me/")
    assert resp.status_code == 200
    assert resp.data["role"] == "admin"
    assert resp.data["username"] == "A1"


@pytest.mark.django_db
def test_jwt_login():
    User.objects.create_user(username="v", email="v@example.com", password="pw12345!")
    client = APIClient()
    resp = client.post("/apis/v1/auth/jwt/create/", {"username": "v", "password": "pw12345!"}, format="json")
    assert resp.status_code == 200
    token = resp.data["access"]

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    assert client.get("/apis/v1/users/me/").data["role"] == "vendor"
