import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="VendorApplication",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("business_name", models.CharField(max_length=200)),
                (
                    "business_type",
                    models.CharField(
                        choices=[
                            ("proprietorship", "Proprietorship"),
                            ("partnership", "Partnership"),
                            ("private_limited", "Private Limited"),
                            ("public_limited", "Public Limited"),
                            ("llp", "LLP"),
                            ("other", "Other"),
                        ],
                        default="proprietorship",
                        max_length=32,
                    ),
                ),
                ("contact_number", models.CharField(max_length=32)),
                ("email", models.EmailField(max_length=191)),
                ("address", models.TextField()),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(max_length=100)),
                ("pincode", models.CharField(max_length=16)),
                ("gst_number", models.CharField(blank=True, max_length=32)),
                ("pan_number", models.CharField(blank=True, max_length=32)),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="pending", max_length=16)),
                ("rejection_reason", models.TextField(blank=True)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "reviewed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vendor_application",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=~models.Q(status="rejected") | ~models.Q(rejection_reason=""),
                        name="vendorapp_rejected_has_reason",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="VendorDocument",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "document_type",
                    models.CharField(
                        choices=[
                            ("gst", "GST Certificate"),
                            ("pan", "PAN Card"),
                            ("registration", "Business Registration"),
                            ("other", "Other"),
                        ],
                        max_length=16,
                    ),
                ),
                ("storage_key", models.CharField(max_length=255, unique=True)),
                ("original_name", models.CharField(blank=True, max_length=255)),
                ("content_type", models.CharField(blank=True, max_length=64)),
                ("size", models.PositiveIntegerField(default=0)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
                (
                    "application",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="documents",
                        to="kyc.vendorapplication",
                    ),
                ),
            ],
            options={
                "ordering": ["uploaded_at", "id"],
                "indexes": [models.Index(fields=["application", "document_type"], name="vendordoc_app_type_idx")],
            },
        ),
        migrations.CreateModel(
            name="AuditLogEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "action",
                    models.CharField(
                        choices=[("approved", "Approved"), ("rejected", "Rejected"), ("updated", "Updated")],
                        max_length=16,
                    ),
                ),
                ("previous_status", models.CharField(blank=True, choices=STATUS_CHOICES, max_length=16)),
                ("new_status", models.CharField(choices=STATUS_CHOICES, max_length=16)),
                ("comments", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "admin",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="kyc_audit_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "application",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="audit_entries",
                        to="kyc.vendorapplication",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "audit log entries",
                "ordering": ["created_at", "id"],
                "indexes": [models.Index(fields=["application", "created_at"], name="kycaudit_app_created_idx")],
            },
        ),
    ]
