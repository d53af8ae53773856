from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile

User = get_user_model()

FORM = {
    "business_name": "Acme Traders",
    "business_type": "proprietorship",
    "contact_number": "9876543210",
    "email": "acme@example.com",
    "address": "12 Market Road",
    "city": "Pune",
    "state": "MH",
    "pincode": "411001",
    "gst_number": "27AAAAA0000A1Z5",
    "pan_number": "AAAAA0000A",
}


def make_vendor(username="v1", **extra):
    return User.objects.create_user(
        username=username, email=f"{username}@example.com", password="x", role="vendor", **extra
    )


def make_admin(username="A1", **extra):
    return User.objects.create_user(
        username=username, email=f"{username.lower()}@example.com", password="x", role="admin", **extra
    )


def pdf(name="doc.pdf", size=None):
    body = b"%PDF-1.4\n..." if size is None else b"0" * size
    return SimpleUploadedFile(name, body, content_type="application/pdf")


def png(name="scan.png"):
    return SimpleUploadedFile(name, b"\x89PNG\r\n\x1a\n....", content_type="image/png")
