from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError


class AttachmentRejected(ValidationError):
    """A candidate document failed the size or content-type checks."""


class ReviewPolicyError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This review action is not allowed."
    default_code = "review_policy"


class InvalidTransition(ReviewPolicyError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Only pending applications can be reviewed."
    default_code = "invalid_transition"


class ApplicationAlreadyExists(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "You have already submitted a vendor application."
    default_code = "application_exists"


class DocumentStorageError(Exception):
    """The object store refused or failed an upload/download."""


class DocumentUploadFailed(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "A document could not be uploaded. Your application was saved; please contact support."
    default_code = "document_upload_failed"

    def __init__(self, application_id: int, uploaded: list[str], failed: str, detail=None):
        self.application_id = application_id
        self.uploaded = list(uploaded)
        self.failed = failed
        super().__init__(
            detail={
                "detail": detail or self.default_detail,
                "application_id": application_id,
                "uploaded": self.uploaded,
                "failed": failed,
            }
        )
