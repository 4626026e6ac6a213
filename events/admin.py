from django.contrib import admin
from .models import Event, Workshop, EventRegistration, WorkshopRegistration


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('title', 'date', 'location', 'capacity', 'is_free', 'price')
    search_fields = ('title', 'description')


@admin.register(Workshop)
class WorkshopAdmin(admin.ModelAdmin):
    list_display = ('title', 'date', 'price', 'max_seats')
    search_fields = ('title',)


@admin.register(EventRegistration)
class EventRegistrationAdmin(admin.ModelAdmin):
    list_display = ('user', 'event', 'payment_status', 'status', 'registered_at')
    list_filter = ('event', 'status')


@admin.register(WorkshopRegistration)
class WorkshopRegistrationAdmin(admin.ModelAdmin):
    list_display = ('name', 'workshop', 'payment_status', 'attended', 'registered_at')
    list_filter = ('workshop', 'attended')
