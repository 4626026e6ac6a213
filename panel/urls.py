from django.urls import path
from django.views.generic import RedirectView
from panel import views

urlpatterns = [
    path('', RedirectView.as_view(pattern_name='panel_event_list'), name='panel_home'),

    path('events/', views.event_list, name='panel_event_list'),
    path('events/create/', views.event_create, name='panel_event_create'),
    path('events/<int:pk>/attendees/', views.event_attendees, name='panel_event_attendees'),
    path('events/<int:pk>/attendees/action/', views.event_attendees_action, name='panel_event_attendees_action'),

    path('workshops/', views.workshop_list, name='panel_workshop_list'),
    path('workshops/create/', views.workshop_create, name='panel_workshop_create'),
    path('workshops/<int:pk>/registrations/', views.workshop_registrations, name='panel_workshop_registrations'),
    path('workshops/registrations/<int:pk>/attendance/', views.toggle_workshop_attendance, name='panel_toggle_attendance'),

    path('users/', views.user_list, name='panel_user_list'),
    path('users/<int:pk>/', views.user_detail, name='panel_user_detail'),
    path('users/<int:pk>/edit/', views.user_edit, name='panel_user_edit'),
    path('users/<int:pk>/verify/', views.verify_user, name='panel_verify_user'),
]
