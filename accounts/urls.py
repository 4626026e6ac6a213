from django.urls import path
from accounts import views

urlpatterns = [
    path('', views.dashboard, name='dashboard'),
    path('onboarding/', views.onboarding, name='onboarding'),
    path('profile/', views.profile, name='profile'),
    path('perks/', views.perks, name='perks'),
    path('resources/', views.resources, name='resources'),
    path('ambassador/', views.ambassador_apply, name='ambassador_apply'),
]
