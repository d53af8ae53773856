import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from kyc.attachments import AttachmentSet, validate_attachment
from kyc.exceptions import AttachmentRejected

from .helpers import pdf, png

MB = 1024 * 1024


def test_file_at_limit_is_accepted():
    f = pdf(size=5 * MB)
    assert validate_attachment(f) is f


def test_file_over_limit_is_rejected():
    with pytest.raises(AttachmentRejected) as exc:
        validate_attachment(pdf(size=5 * MB + 1))
    assert "File size must be less than 5MB." in str(exc.value.detail)


@pytest.mark.parametrize("content_type", ["application/pdf", "image/jpeg", "image/jpg", "image/png"])
def test_allowed_types(content_type):
    f = SimpleUploadedFile("x", b"abc", content_type=content_type)
    validate_attachment(f)


def test_disallowed_type_is_rejected():
    f = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
    with pytest.raises(AttachmentRejected) as exc:
        validate_attachment(f)
    assert "Only PDF, JPG, and PNG files are allowed." in str(exc.value.detail)


def test_limit_follows_settings(settings):
    settings.KYC_MAX_DOCUMENT_BYTES = 10
    with pytest.raises(AttachmentRejected):
        validate_attachment(pdf(size=11))


def test_stage_replaces_same_type_last_write_wins():
    staged = AttachmentSet()
    first = pdf("first.pdf")
    second = png("second.png")
    staged.stage("gst", first)
    staged.stage("gst", second)

    assert len(staged) == 1
    assert staged.get("gst").file is second
    assert staged.get("gst").extension == "png"
    assert first.closed


def test_stage_rejected_file_keeps_previous():
    staged = AttachmentSet()
    good = pdf()
    staged.stage("pan", good)
    with pytest.raises(AttachmentRejected):
        staged.stage("pan", SimpleUploadedFile("a.txt", b"x", content_type="text/plain"))
    assert staged.get("pan").file is good


def test_unknown_document_type():
    with pytest.raises(AttachmentRejected):
        AttachmentSet().stage("passport", pdf())


def test_remove_and_iteration_order():
    staged = AttachmentSet()
    staged.stage("registration", pdf())
    staged.stage("gst", pdf())
    staged.stage("other", png())
    staged.remove("gst")

    assert "gst" not in staged
    assert [d.document_type for d in staged] == ["registration", "other"]
    staged.remove("gst")  # no-op


def test_from_files_collects_errors_per_type():
    files = {
        "gst": pdf(),
        "pan": SimpleUploadedFile("a.txt", b"x", content_type="text/plain"),
        "other": pdf(size=5 * MB + 1),
    }
    with pytest.raises(AttachmentRejected) as exc:
        AttachmentSet.from_files(files)
    assert set(exc.value.detail) == {"pan", "other"}


def test_from_files_ignores_missing_types():
    staged = AttachmentSet.from_files({"gst": pdf()})
    assert staged.types == ["gst"]


def test_six_megabyte_file_is_not_staged():
    staged = AttachmentSet()
    with pytest.raises(AttachmentRejected):
        staged.stage("gst", pdf(size=6 * MB))
    assert "gst" not in staged
