import pytest
from django.core.files.storage import InMemoryStorage
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from kyc import workflow
from kyc.attachments import AttachmentSet
from kyc.exceptions import InvalidTransition, ReviewPolicyError
from kyc.models import AuditLogEntry, ImmutableRecordError, VendorApplication, VendorDocument
from kyc.services import submit_application
from kyc.storage import DocumentStore

from .helpers import FORM, make_admin, make_vendor, pdf, png

pytestmark = pytest.mark.django_db


@pytest.fixture
def application():
    return submit_application(make_vendor(), FORM)


def test_approve_records_reviewer_and_audit(application):
    admin = make_admin()
    entry = workflow.approve(application, admin, "  looks good ")

    application.refresh_from_db()
    assert application.status == VendorApplication.APPROVED
    assert application.reviewed_by == admin
    assert application.reviewed_at is not None
    assert entry.action == AuditLogEntry.Action.APPROVED
    assert (entry.previous_status, entry.new_status) == ("pending", "approved")
    assert entry.comments == "looks good"
    assert application.audit_entries.count() == 1


def test_approve_updates_callers_instance(application):
    workflow.approve(application, make_admin())
    assert application.status == VendorApplication.APPROVED


def test_reject_requires_reason(application):
    admin = make_admin()
    for reason in ("", "   ", None):
        with pytest.raises(ReviewPolicyError):
            workflow.reject(application, admin, reason)
    application.refresh_from_db()
    assert application.status == VendorApplication.PENDING
    assert AuditLogEntry.objects.count() == 0


def test_reject_stores_reason(application):
    entry = workflow.reject(application, make_admin(), "Blurry PAN scan")
    application.refresh_from_db()
    assert application.status == VendorApplication.REJECTED
    assert application.rejection_reason == "Blurry PAN scan"
    assert entry.comments == "Blurry PAN scan"
    assert entry.new_status == "rejected"


@pytest.mark.parametrize("first", ["approve", "reject"])
def test_terminal_states_refuse_further_review(application, first):
    admin = make_admin()
    if first == "approve":
        workflow.approve(application, admin)
    else:
        workflow.reject(application, admin, "no")

    with pytest.raises(InvalidTransition):
        workflow.approve(application, admin)
    with pytest.raises(InvalidTransition):
        workflow.reject(application, admin, "again")
    assert AuditLogEntry.objects.filter(application=application).count() == 1


def test_stale_instance_cannot_overwrite_decision(application):
    admin = make_admin()
    stale = VendorApplication.objects.get(pk=application.pk)
    workflow.approve(application, admin)

    assert stale.status == VendorApplication.PENDING
    with pytest.raises(InvalidTransition):
        workflow.reject(stale, make_admin("A2"), "late")
    application.refresh_from_db()
    assert application.status == VendorApplication.APPROVED


def test_vendor_cannot_review(application):
    with pytest.raises(ReviewPolicyError):
        workflow.approve(application, make_vendor("v2"))


def test_staff_user_counts_as_admin(application):
    staff = make_vendor("ops", is_staff=True)
    workflow.approve(application, staff)
    assert application.status == VendorApplication.APPROVED


def test_rejected_without_reason_violates_constraint(application):
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            VendorApplication.objects.filter(pk=application.pk).update(status="rejected", rejection_reason="")


def test_audit_entries_are_append_only(application):
    entry = workflow.approve(application, make_admin())
    entry.comments = "edited"
    with pytest.raises(ImmutableRecordError):
        entry.save()
    with pytest.raises(ImmutableRecordError):
        entry.delete()


def test_documents_are_immutable(application):
    doc = VendorDocument.objects.create(
        application=application, document_type="gst", storage_key="1/1/gst_1.pdf", size=3
    )
    doc.size = 4
    with pytest.raises(ImmutableRecordError):
        doc.save()
    with pytest.raises(ImmutableRecordError):
        doc.delete()


def test_end_to_end_review_by_admin_a1():
    vendor = make_vendor("shopkeeper")
    app = submit_application(vendor, FORM)
    a1 = make_admin("A1")

    workflow.reject(app, a1, "Missing GST certificate")

    app.refresh_from_db()
    entries = list(app.audit_entries.all())
    assert len(entries) == 1
    assert entries[0].admin == a1
    assert entries[0].previous_status == "pending"
    assert entries[0].new_status == app.status == "rejected"
    assert app.reviewed_by == a1


def test_end_to_end_submit_then_approve():
    staged = AttachmentSet()
    staged.stage("gst", pdf())
    staged.stage("pan", png())
    staged.stage("registration", pdf())
    app = submit_application(make_vendor(), dict(FORM, business_name="Acme"), staged, store=DocumentStore(InMemoryStorage()))

    assert VendorApplication.objects.filter(business_name="Acme", status="pending").count() == 1
    assert app.documents.count() == 3
    assert app.audit_entries.count() == 0

    a1 = make_admin("A1")
    workflow.approve(app, a1)

    app.refresh_from_db()
    assert app.status == "approved"
    assert app.reviewed_by == a1
    entry = app.audit_entries.get()
    assert (entry.action, entry.previous_status, entry.new_status) == ("approved", "pending", "approved")


def test_reviewed_application_cannot_be_deleted_with_its_history(application):
    workflow.approve(application, make_admin())
    VendorDocument.objects.create(
        application=application, document_type="gst", storage_key="9/9/gst_1.pdf", size=3
    )

    with pytest.raises(ProtectedError):
        with transaction.atomic():
            VendorApplication.objects.filter(pk=application.pk).delete()
    with pytest.raises(ProtectedError):
        with transaction.atomic():
            application.user.delete()

    assert AuditLogEntry.objects.filter(application=application).count() == 1
    assert VendorDocument.objects.filter(application=application).count() == 1
