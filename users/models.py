from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    class Role(models.TextChoices):
        VENDOR = "vendor", "Vendor"
        ADMIN = "admin", "Admin"

    email = models.EmailField(unique=True, max_length=191)
    full_name = models.CharField(max_length=150, blank=True)
    # Explicit role for RBAC; new accounts are vendors
    role = models.CharField(
        max_length=16,
        choices=Role.choices,
        default=Role.VENDOR,
    )

    def __str__(self):
        return self.username

    @property
    def effective_role(self) -> str:
        """
        Resolve the user's effective role:
        1) is_superuser or is_staff -> 'admin'
        2) explicit `role` when it is a known value
        3) else -> 'vendor'
        """
        if self.is_superuser or self.is_staff:
            return self.Role.ADMIN
        if self.role in self.Role.values:
            return self.role
        return self.Role.VENDOR

    @property
    def role_label(self) -> str:
        """Human-readable label corresponding to effective_role."""
        return dict(self.Role.choices).get(self.effective_role, self.effective_role)

    @property
    def is_vendor(self) -> bool:
        return self.effective_role == self.Role.VENDOR

    @property
    def is_kyc_admin(self) -> bool:
        return self.effective_role == self.Role.ADMIN
