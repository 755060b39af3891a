from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'email', 'role', 'university', 'connections', 'is_active']
    list_filter = ['role', 'is_active', 'is_staff']
    search_fields = ['username', 'email', 'first_name', 'last_name', 'university', 'field']
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Profile', {
            'fields': (
                'role', 'profile_image_url', 'university', 'field',
                'year_of_study', 'location', 'bio', 'skills', 'connections',
            ),
        }),
    )
