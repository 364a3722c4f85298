# common/auth_views.py
from rest_framework.permissions import AllowAny
from rest_framework_simplejwt.views import TokenObtainPairView
from .auth_tokens import TenantAwareTokenObtainPairSerializer


class TenantAwareTokenObtainPairView(TokenObtainPairView):
    permission_classes = [AllowAny]
    serializer_class = TenantAwareTokenObtainPairSerializer
