from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.views import healthz

urlpatterns = [
    # Django's own admin lives off /admin/ so the review dashboard can own it
    path("django-admin/", admin.site.urls),
    path("healthz/", healthz, name="healthz"),

    # Auth + pages
    path("accounts/", include("django.contrib.auth.urls")),
    path("", include("users.urls")),
    path("", include("dashboards.urls")),

    # Versioned API (DRF-only), per-app mounts
    path("apis/v1/schema/", SpectacularAPIView.as_view(), name="v1-schema"),
    path("apis/v1/docs/", SpectacularSwaggerView.as_view(url_name="v1-schema"), name="v1-docs"),
    path("apis/v1/auth/jwt/create/", TokenObtainPairView.as_view(), name="v1-jwt-create"),
    path("apis/v1/auth/jwt/refresh/", TokenRefreshView.as_view(), name="v1-jwt-refresh"),
    path("apis/v1/users/", include("users.urls_v1")),
    path("apis/v1/kyc/", include("kyc.urls_v1")),
]
