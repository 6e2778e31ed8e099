from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django admin
    path('admin/', admin.site.urls),
    path('api/auth/', include('apps.users.urls')),
    path('api/stores/', include('apps.stores.urls')),
    path('api/portfolios/', include('apps.portfolios.urls')),
    path('api/providers/', include('apps.providers.urls')),
    path('api/manage/', include('apps.providers.manage_urls')),
    path('api/uploads/', include('apps.uploads.urls')),
    path('api/chat/', include('apps.messaging.urls')),
    path('api/notifications/', include('apps.notifications.urls')),
]
