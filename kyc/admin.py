from django import forms
from django.contrib import admin, messages
from django.contrib.admin.helpers import ActionForm

from . import workflow
from .exceptions import ReviewPolicyError
from .models import AuditLogEntry, VendorApplication, VendorDocument


class ReviewActionForm(ActionForm):
    """Extra field for the reject action."""

    note = forms.CharField(
        required=False,
        label="Rejection reason",
        widget=forms.Textarea(attrs={"rows": 2}),
        help_text="Required when rejecting; stored on each rejected application.",
    )


class VendorDocumentInline(admin.TabularInline):
    model = VendorDocument
    extra = 0
    can_delete = False
    fields = ("document_type", "original_name", "content_type", "size", "storage_key", "uploaded_at")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class AuditLogEntryInline(admin.TabularInline):
    model = AuditLogEntry
    extra = 0
    can_delete = False
    fields = ("created_at", "admin", "action", "previous_status", "new_status", "comments")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(VendorApplication)
class VendorApplicationAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "business_name", "business_type", "status", "created_at", "reviewed_by", "reviewed_at")
    list_filter = ("status", "business_type", "created_at")
    search_fields = ("user__username", "user__email", "business_name", "email")
    date_hierarchy = "created_at"
    readonly_fields = ("status", "rejection_reason", "reviewed_by", "reviewed_at", "created_at", "updated_at")
    inlines = (VendorDocumentInline, AuditLogEntryInline)

    action_form = ReviewActionForm
    actions = ("approve_selected", "reject_selected")

    # Applications are created by vendors through submission and never removed here
    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description="Approve selected applications")
    def approve_selected(self, request, queryset):
        approved = skipped = 0
        for app in queryset.select_related("user"):
            try:
                workflow.approve(app, request.user)
            except ReviewPolicyError:
                skipped += 1
                continue
            approved += 1
        if approved:
            self.message_user(request, f"Approved {approved} application(s).", level=messages.SUCCESS)
        if skipped:
            self.message_user(request, f"Skipped {skipped} non-pending application(s).", level=messages.WARNING)

    @admin.action(description="Reject selected applications")
    def reject_selected(self, request, queryset):
        note = (request.POST.get("note") or "").strip()
        if not note:
            self.message_user(request, "A rejection reason is required.", level=messages.ERROR)
            return
        rejected = skipped = 0
        for app in queryset.select_related("user"):
            try:
                workflow.reject(app, request.user, note)
            except ReviewPolicyError:
                skipped += 1
                continue
            rejected += 1
        if rejected:
            self.message_user(request, f"Rejected {rejected} application(s).", level=messages.WARNING)
        if skipped:
            self.message_user(request, f"Skipped {skipped} non-pending application(s).", level=messages.INFO)


@admin.register(AuditLogEntry)
class AuditLogEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "application", "admin", "action", "previous_status", "new_status", "created_at")
    list_filter = ("action", "new_status")
    search_fields = ("application__business_name", "admin__username", "comments")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
