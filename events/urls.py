from django.urls import path
from events import views

urlpatterns = [
    path('', views.home, name='home'),
    path('events/<int:pk>/', views.event_detail, name='event_detail'),
    path('events/<int:pk>/register/', views.register_event, name='register_event'),
    path('workshops/', views.workshop_list, name='workshop_list'),
    path('workshops/<int:pk>/', views.workshop_detail, name='workshop_detail'),

    # Participant side of the dashboard
    path('dashboard/events/', views.my_events, name='my_events'),
    path('dashboard/workshops/', views.my_workshops, name='my_workshops'),
    path('dashboard/workshops/<int:pk>/certificate/', views.workshop_certificate, name='workshop_certificate'),
]
