"""URL configuration for the TAMS API."""

from django.urls import include, path
from rest_framework import routers
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from . import views


router = routers.DefaultRouter()
router.register(r"asset-types", views.AssetTypeViewSet)
router.register(r"templates", views.ComponentTemplateViewSet)
router.register(r"template-items", views.ComponentTemplateItemViewSet)
router.register(r"assets", views.AssetViewSet)
router.register(r"inspections", views.InspectionViewSet)
router.register(r"component-scores", views.InspectionComponentScoreViewSet)


urlpatterns = [
    path("api/", include(router.urls)),
    path("api/auth/login/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/auth/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/score/", views.score_components, name="score_components"),
]
