from django.urls import path, include
from rest_framework.routers import DefaultRouter

from backend.emergency.views import AmbulanceViewSet, EmergencyCallViewSet, HospitalViewSet, SystemStatusView

router = DefaultRouter()
router.register(r'hospitals', HospitalViewSet, basename='hospital')
router.register(r'emergencies', EmergencyCallViewSet, basename='emergency')
router.register(r'ambulances', AmbulanceViewSet, basename='ambulance')

urlpatterns = [
    path('api/v1/', include(router.urls)),
    path('api/v1/system/status/', SystemStatusView.as_view(), name='system-status'),
]
