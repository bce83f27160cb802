from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('', include('apps.dashboard.urls')),

    path('admin/', admin.site.urls),
    path('accounts/', include('apps.accounts.urls')),
    path('tax/', include('apps.tax.urls')),
]
