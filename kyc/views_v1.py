from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view, inline_serializer
from rest_framework import mixins, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsKYCAdmin, IsVendor

from . import workflow
from .attachments import AttachmentSet
from .downloads import document_response
from .exceptions import DocumentStorageError
from .selectors import (
    application_of,
    applications_for,
    documents_visible_to,
    filter_by_status,
    status_counts,
)
from .serializers_v1 import (
    ApproveSerializer,
    AuditLogEntrySerializer,
    RejectSerializer,
    StatusCountsSerializer,
    VendorApplicationCreateSerializer,
    VendorApplicationDetailSerializer,
    VendorApplicationSerializer,
    VendorDocumentSerializer,
)
from .services import submit_application


class DocumentUnavailable(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "The document could not be retrieved from storage."
    default_code = "document_unavailable"


@extend_schema_view(
    retrieve=extend_schema(tags=["KYC Applications"], summary="Retrieve an application with documents and history"),
)
class VendorApplicationViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    serializer_class = VendorApplicationDetailSerializer

    def get_queryset(self):
        return applications_for(self.request.user)

    def get_permissions(self):  # type: ignore[override]
        if self.action == "create" or self.action == "mine":
            return [IsAuthenticated(), IsVendor()]
        if self.action in {"approve", "reject"}:
            return [IsAuthenticated(), IsKYCAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        tags=["KYC Applications"],
        summary="List applications (admins: all, vendors: own)",
        parameters=[
            OpenApiParameter("status", str, enum=["all", "pending", "approved", "rejected"], required=False),
        ],
        responses=inline_serializer(
            "VendorApplicationList",
            {
                "status": serializers.CharField(),
                "counts": StatusCountsSerializer(),
                "results": VendorApplicationSerializer(many=True),
            },
        ),
    )
    def list(self, request):
        wanted = request.query_params.get("status") or "all"
        rows = list(self.get_queryset())
        try:
            filtered = filter_by_status(rows, wanted)
        except ValueError as e:
            raise ValidationError({"status": [str(e)]})
        return Response({
            "status": wanted.lower(),
            "counts": status_counts(rows),
            "results": VendorApplicationSerializer(filtered, many=True).data,
        })

    @extend_schema(
        tags=["KYC Applications"],
        summary="Submit a vendor application with KYC documents",
        request=VendorApplicationCreateSerializer,
        responses={201: VendorApplicationDetailSerializer},
    )
    def create(self, request):
        ser = VendorApplicationCreateSerializer(data=request.data, context={"request": request})
        ser.is_valid(raise_exception=True)
        fields, files = ser.split()

        staged = AttachmentSet.from_files(files)

        app = submit_application(request.user, fields, staged)
        data = VendorApplicationDetailSerializer(app, context={"request": request}).data
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["KYC Applications"], summary="My application, documents and review history")
    @action(detail=False, methods=["get"], url_path="mine")
    def mine(self, request):
        app = application_of(request.user)
        if app is None:
            raise NotFound("You have not submitted a vendor application yet.")
        return Response(VendorApplicationDetailSerializer(app, context={"request": request}).data)

    @extend_schema(
        tags=["KYC Review"],
        summary="Approve a pending application",
        request=ApproveSerializer,
        responses=AuditLogEntrySerializer,
    )
    @action(detail=True, methods=["post"], url_path="approve")
    def approve(self, request, pk=None):
        app = self.get_object()
        ser = ApproveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        entry = workflow.approve(app, request.user, ser.validated_data["comments"])
        return Response(AuditLogEntrySerializer(entry).data)

    @extend_schema(
        tags=["KYC Review"],
        summary="Reject a pending application (reason required)",
        request=RejectSerializer,
        responses=AuditLogEntrySerializer,
    )
    @action(detail=True, methods=["post"], url_path="reject")
    def reject(self, request, pk=None):
        app = self.get_object()
        ser = RejectSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        entry = workflow.reject(app, request.user, ser.validated_data["reason"])
        return Response(AuditLogEntrySerializer(entry).data)


@extend_schema_view(
    retrieve=extend_schema(tags=["KYC Documents"], summary="Document metadata"),
)
class VendorDocumentViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = VendorDocumentSerializer

    def get_queryset(self):
        return documents_visible_to(self.request.user)

    @extend_schema(tags=["KYC Documents"], summary="Download the stored file", responses={(200, "application/octet-stream"): OpenApiTypes.BINARY})
    @action(detail=True, methods=["get"], url_path="download")
    def download(self, request, pk=None):
        doc = self.get_object()
        try:
            return document_response(doc)
        except DocumentStorageError:
            raise DocumentUnavailable()

