from __future__ import annotations

from django.urls import reverse
from rest_framework import serializers

from .attachments import validate_attachment
from .models import AuditLogEntry, DocumentType, VendorApplication, VendorDocument
from .selectors import audit_trail, documents_for


class VendorDocumentSerializer(serializers.ModelSerializer):
    download_url = serializers.SerializerMethodField()

    class Meta:
        model = VendorDocument
        fields = [
            "id",
            "application",
            "document_type",
            "original_name",
            "content_type",
            "size",
            "uploaded_at",
            "download_url",
        ]
        read_only_fields = fields

    def get_download_url(self, obj) -> str:
        return reverse("kyc-documents-download", kwargs={"pk": obj.pk})


class AuditLogEntrySerializer(serializers.ModelSerializer):
    admin_name = serializers.SerializerMethodField()

    class Meta:
        model = AuditLogEntry
        fields = [
            "id",
            "application",
            "admin",
            "admin_name",
            "action",
            "previous_status",
            "new_status",
            "comments",
            "created_at",
        ]
        read_only_fields = fields

    def get_admin_name(self, obj) -> str:
        admin = obj.admin
        return getattr(admin, "full_name", "") or admin.get_username()


class VendorApplicationSerializer(serializers.ModelSerializer):
    class Meta:
        model = VendorApplication
        fields = [
            "id",
            "user",
            "business_name",
            "business_type",
            "contact_number",
            "email",
            "address",
            "city",
            "state",
            "pincode",
            "gst_number",
            "pan_number",
            "status",
            "rejection_reason",
            "reviewed_by",
            "reviewed_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class VendorApplicationDetailSerializer(VendorApplicationSerializer):
    documents = serializers.SerializerMethodField()
    audit_trail = serializers.SerializerMethodField()

    class Meta(VendorApplicationSerializer.Meta):
        fields = VendorApplicationSerializer.Meta.fields + ["documents", "audit_trail"]
        read_only_fields = fields

    def get_documents(self, obj) -> list[dict]:
        return VendorDocumentSerializer(documents_for(obj), many=True, context=self.context).data

    def get_audit_trail(self, obj) -> list[dict]:
        return AuditLogEntrySerializer(audit_trail(obj), many=True, context=self.context).data


class VendorApplicationCreateSerializer(serializers.ModelSerializer):
    business_name = serializers.CharField(max_length=200, allow_blank=False, required=True)
    contact_number = serializers.CharField(max_length=32, allow_blank=False, required=True)
    email = serializers.EmailField(max_length=191, required=True)
    address = serializers.CharField(allow_blank=False, required=True)
    city = serializers.CharField(max_length=100, allow_blank=False, required=True)
    state = serializers.CharField(max_length=100, allow_blank=False, required=True)
    pincode = serializers.CharField(max_length=16, allow_blank=False, required=True)
    gst_number = serializers.CharField(max_length=32, allow_blank=True, required=False)
    pan_number = serializers.CharField(max_length=32, allow_blank=True, required=False)

    gst = serializers.FileField(required=False, write_only=True)
    pan = serializers.FileField(required=False, write_only=True)
    registration = serializers.FileField(required=False, write_only=True)
    other = serializers.FileField(required=False, write_only=True)

    class Meta:
        model = VendorApplication
        fields = [
            "business_name",
            "business_type",
            "contact_number",
            "email",
            "address",
            "city",
            "state",
            "pincode",
            "gst_number",
            "pan_number",
            "gst",
            "pan",
            "registration",
            "other",
        ]
        extra_kwargs = {"business_type": {"required": True}}

    def validate_gst(self, f):
        return validate_attachment(f)

    def validate_pan(self, f):
        return validate_attachment(f)

    def validate_registration(self, f):
        return validate_attachment(f)

    def validate_other(self, f):
        return validate_attachment(f)

    def split(self) -> tuple[dict, dict]:
        """Return (application fields, {document_type: upload})."""
        data = dict(self.validated_data)
        files = {t: data.pop(t) for t in DocumentType.values if t in data}
        return data, files


class ApproveSerializer(serializers.Serializer):
    comments = serializers.CharField(required=False, allow_blank=True, default="")


class RejectSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class StatusCountsSerializer(serializers.Serializer):
    all = serializers.IntegerField()
    pending = serializers.IntegerField()
    approved = serializers.IntegerField()
    rejected = serializers.IntegerField()
