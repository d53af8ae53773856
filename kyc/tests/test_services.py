import pytest
from django.core.files.storage import InMemoryStorage
from rest_framework.exceptions import PermissionDenied, ValidationError

from core import metrics
from kyc.attachments import AttachmentSet
from kyc.exceptions import ApplicationAlreadyExists, DocumentStorageError, DocumentUploadFailed
from kyc.models import VendorApplication, VendorDocument
from kyc.services import submit_application
from kyc.storage import DocumentStore

from .helpers import FORM, make_admin, make_vendor, pdf, png

pytestmark = pytest.mark.django_db


def _staged(**files):
    staged = AttachmentSet()
    for doc_type, f in files.items():
        staged.stage(doc_type, f)
    return staged


def test_submit_creates_pending_application_with_documents():
    vendor = make_vendor()
    store = DocumentStore(InMemoryStorage())
    before = metrics.counter("kyc.submission")

    app = submit_application(vendor, FORM, _staged(gst=pdf("gst.pdf"), pan=png("pan.png")), store=store)

    assert app.status == VendorApplication.PENDING
    assert app.user == vendor
    assert app.rejection_reason == ""
    docs = list(app.documents.all())
    assert [d.document_type for d in docs] == ["gst", "pan"]
    for d in docs:
        assert d.storage_key.startswith(f"{vendor.pk}/{app.pk}/{d.document_type}_")
        assert store.exists(d.storage_key)
    assert docs[1].download_name == "pan_document.png"
    assert metrics.counter("kyc.submission") == before + 1


def test_submit_without_documents():
    app = submit_application(make_vendor(), FORM, store=DocumentStore(InMemoryStorage()))
    assert app.documents.count() == 0


def test_values_are_stripped():
    data = dict(FORM, business_name="  Acme  ")
    app = submit_application(make_vendor(), data, store=DocumentStore(InMemoryStorage()))
    assert app.business_name == "Acme"


def test_missing_required_field_creates_nothing():
    data = dict(FORM, city="   ")
    with pytest.raises(ValidationError) as exc:
        submit_application(make_vendor(), data)
    assert "city" in exc.value.detail
    assert VendorApplication.objects.count() == 0


def test_invalid_business_type():
    with pytest.raises(ValidationError):
        submit_application(make_vendor(), dict(FORM, business_type="trust"))


def test_admin_cannot_submit():
    with pytest.raises(PermissionDenied):
        submit_application(make_admin(), FORM)


def test_second_submission_conflicts():
    vendor = make_vendor()
    store = DocumentStore(InMemoryStorage())
    submit_application(vendor, FORM, store=store)
    with pytest.raises(ApplicationAlreadyExists):
        submit_application(vendor, FORM, store=store)
    assert VendorApplication.objects.filter(user=vendor).count() == 1


class FlakyStore(DocumentStore):
    """Stores the first `ok` uploads, then fails."""

    def __init__(self, ok):
        super().__init__(InMemoryStorage())
        self.ok = ok
        self.calls = 0

    def upload(self, key, content):
        self.calls += 1
        if self.calls > self.ok:
            raise DocumentStorageError("store unavailable")
        return super().upload(key, content)


def test_partial_upload_failure_keeps_application_and_earlier_documents():
    vendor = make_vendor()
    store = FlakyStore(ok=1)
    staged = _staged(gst=pdf(), pan=pdf(), registration=pdf())

    with pytest.raises(DocumentUploadFailed) as exc:
        submit_application(vendor, FORM, staged, store=store)

    err = exc.value
    app = VendorApplication.objects.get(user=vendor)
    assert err.application_id == app.pk
    assert err.uploaded == ["gst"]
    assert err.failed == "pan"
    assert err.status_code == 502
    assert list(VendorDocument.objects.filter(application=app).values_list("document_type", flat=True)) == ["gst"]
    # no further uploads attempted after the first failure
    assert store.calls == 2
    assert app.status == VendorApplication.PENDING


def test_failure_on_first_document_leaves_bare_application():
    vendor = make_vendor()
    with pytest.raises(DocumentUploadFailed) as exc:
        submit_application(vendor, FORM, _staged(other=pdf()), store=FlakyStore(ok=0))
    assert exc.value.uploaded == []
    assert VendorApplication.objects.filter(user=vendor).exists()
    assert VendorDocument.objects.count() == 0
