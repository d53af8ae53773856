from django.urls import path

from . import views

urlpatterns = [
    path("", views.index, name="index"),
    path("dashboard/", views.dashboard, name="dashboard"),
    path("dashboard/notifications/read/", views.notifications_read, name="notifications-read"),
    path("vendor/register/", views.vendor_register, name="vendor-register"),
    path("vendor/status/", views.vendor_status, name="vendor-status"),
    path("admin/dashboard/", views.admin_dashboard, name="admin-dashboard"),
    path("admin/dashboard/applications/<int:pk>/", views.admin_application_detail, name="admin-application"),
    path("admin/dashboard/applications/<int:pk>/approve/", views.admin_application_approve, name="admin-application-approve"),
    path("admin/dashboard/applications/<int:pk>/reject/", views.admin_application_reject, name="admin-application-reject"),
    path("documents/<int:pk>/download/", views.document_download, name="document-download"),
]
