from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, AmbassadorApplication, Perk, Resource


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'name', 'college', 'role', 'points', 'tier', 'verification_status')
    list_filter = ('role', 'tier', 'verification_status')
    search_fields = ('email', 'name', 'college')
    fieldsets = BaseUserAdmin.fieldsets + (
        ('REvamp', {'fields': (
            'name', 'college', 'year', 'role', 'verification_status', 'student_id_number',
            'primary_domain', 'domains', 'points', 'badges', 'streak', 'onboarding_completed',
        )}),
    )


@admin.register(AmbassadorApplication)
class AmbassadorApplicationAdmin(admin.ModelAdmin):
    list_display = ('user', 'status', 'applied_at')
    list_filter = ('status',)


@admin.register(Perk)
class PerkAdmin(admin.ModelAdmin):
    list_display = ('title', 'tier')


@admin.register(Resource)
class ResourceAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'domain')
    list_filter = ('domain', 'category')
