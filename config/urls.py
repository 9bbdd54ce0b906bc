"""
URL configuration for the Loan Calculator service.
"""

from django.contrib import admin
from django.urls import include, path

from apps.core.views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health-check'),
    path('api/', include('apps.calculator.urls')),
    path('api/', include('apps.emis.urls')),
    path('api/', include('apps.budgets.urls')),
    path('api/', include('apps.core.urls')),
]
