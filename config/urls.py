from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('django-admin/', admin.site.urls),

    # Identity provider routes from allauth:
    # /accounts/google/login/, /accounts/login/, /accounts/logout/, ...
    path('accounts/', include('allauth.urls')),

    path('', include('events.urls')),
    path('dashboard/', include('accounts.urls')),
    path('api/razorpay/', include('payments.urls')),
    path('admin/', include('panel.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
