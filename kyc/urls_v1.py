from rest_framework.routers import DefaultRouter

from .views_v1 import VendorApplicationViewSet, VendorDocumentViewSet

router = DefaultRouter()
router.register(r"applications", VendorApplicationViewSet, basename="kyc-applications")
router.register(r"documents", VendorDocumentViewSet, basename="kyc-documents")

urlpatterns = router.urls
