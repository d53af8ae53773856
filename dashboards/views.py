from __future__ import annotations

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST
from rest_framework.exceptions import ValidationError as APIValidationError

from kyc import workflow
from kyc.attachments import AttachmentSet
from kyc.downloads import document_response
from kyc.exceptions import (
    ApplicationAlreadyExists,
    DocumentStorageError,
    DocumentUploadFailed,
    ReviewPolicyError,
)
from kyc.forms import ApproveForm, RejectForm, VendorApplicationForm
from kyc.selectors import (
    STATUS_FILTERS,
    application_of,
    applications_for,
    audit_trail,
    documents_for,
    documents_visible_to,
    filter_by_status,
    status_counts,
)
from kyc.services import submit_application
from notifications.services import mark_all_read, unread_for

from .pages import (
    ADMIN_DASHBOARD,
    DASHBOARD,
    LOGIN,
    PAGE_URLS,
    VENDOR_REGISTER,
    VENDOR_STATUS,
    page_required,
    resolve_page,
)


def index(request):
    page = resolve_page(request.path, request.user)
    if page == LOGIN:
        return redirect_to_login("/dashboard/")
    return redirect(PAGE_URLS[page])


@page_required(DASHBOARD)
def dashboard(request):
    user = request.user
    ctx = {"notifications": unread_for(user)}
    if user.is_kyc_admin:
        ctx["counts"] = status_counts(list(applications_for(user)))
    else:
        ctx["application"] = application_of(user)
    return render(request, "dashboards/dashboard.html", ctx)


@login_required
@require_POST
def notifications_read(request):
    mark_all_read(request.user)
    return redirect("dashboard")


# --- vendor pages ---

@page_required(VENDOR_REGISTER)
def vendor_register(request):
    if application_of(request.user) is not None:
        messages.info(request, "You have already submitted a vendor application.")
        return redirect("vendor-status")

    if request.method == "POST":
        form = VendorApplicationForm(request.POST, request.FILES)
        if form.is_valid():
            staged = AttachmentSet.from_files(form.document_files())
            try:
                submit_application(request.user, form.application_data(), staged)
            except ApplicationAlreadyExists:
                messages.info(request, "You have already submitted a vendor application.")
                return redirect("vendor-status")
            except DocumentUploadFailed as e:
                messages.error(
                    request,
                    f"Your application was saved but the {e.failed} document could not be uploaded. "
                    "Please contact support.",
                )
                return redirect("vendor-status")
            except APIValidationError as e:
                for field, errs in e.detail.items():
                    for err in errs:
                        form.add_error(field if field in form.fields else None, str(err))
            else:
                messages.success(request, "Application submitted. We will notify you once it has been reviewed.")
                return redirect("vendor-status")
        messages.error(request, "Please correct the errors below.")
    else:
        form = VendorApplicationForm(initial={"email": request.user.email})

    return render(request, "dashboards/vendor_register.html", {"form": form})


@page_required(VENDOR_STATUS)
def vendor_status(request):
    app = application_of(request.user)
    ctx = {"application": app, "documents": [], "audit_trail": []}
    if app is not None:
        ctx["documents"] = documents_for(app)
        ctx["audit_trail"] = audit_trail(app)
    return render(request, "dashboards/vendor_status.html", ctx)


# --- admin pages ---

@page_required(ADMIN_DASHBOARD)
def admin_dashboard(request):
    wanted = (request.GET.get("status") or "all").lower()
    if wanted not in STATUS_FILTERS:
        wanted = "all"
    rows = list(applications_for(request.user))
    return render(
        request,
        "dashboards/admin_dashboard.html",
        {
            "applications": filter_by_status(rows, wanted),
            "counts": status_counts(rows),
            "status": wanted,
            "tabs": STATUS_FILTERS,
        },
    )


@page_required(ADMIN_DASHBOARD)
def admin_application_detail(request, pk: int):
    app = get_object_or_404(applications_for(request.user), pk=pk)
    return render(
        request,
        "dashboards/admin_application.html",
        {
            "application": app,
            "documents": documents_for(app),
            "audit_trail": audit_trail(app),
            "approve_form": ApproveForm(),
            "reject_form": RejectForm(),
        },
    )


@page_required(ADMIN_DASHBOARD)
@require_POST
def admin_application_approve(request, pk: int):
    app = get_object_or_404(applications_for(request.user), pk=pk)
    form = ApproveForm(request.POST)
    if form.is_valid():
        try:
            workflow.approve(app, request.user, form.cleaned_data["comments"])
        except ReviewPolicyError as e:
            messages.error(request, str(e.detail))
        else:
            messages.success(request, f"{app.business_name} approved.")
    return redirect("admin-application", pk=app.pk)


@page_required(ADMIN_DASHBOARD)
@require_POST
def admin_application_reject(request, pk: int):
    app = get_object_or_404(applications_for(request.user), pk=pk)
    form = RejectForm(request.POST)
    if not form.is_valid():
        for err in form.errors.get("reason", []):
            messages.error(request, err)
        return redirect("admin-application", pk=app.pk)
    try:
        workflow.reject(app, request.user, form.cleaned_data["reason"])
    except ReviewPolicyError as e:
        messages.error(request, str(e.detail))
    else:
        messages.warning(request, f"{app.business_name} rejected.")
    return redirect("admin-application", pk=app.pk)


@login_required
def document_download(request, pk: int):
    doc = get_object_or_404(documents_visible_to(request.user), pk=pk)
    try:
        return document_response(doc)
    except DocumentStorageError:
        messages.error(request, "The document could not be retrieved. Please try again later.")
        return redirect("dashboard")
