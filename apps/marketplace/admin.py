from django.contrib import admin
from .models import Service, ServiceRequest


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'price', 'status', 'provider', 'created_at']
    list_filter = ['status', 'category']
    search_fields = ['title', 'description', 'category']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(ServiceRequest)
class ServiceRequestAdmin(admin.ModelAdmin):
    list_display = ['service', 'requester', 'status', 'requested_at', 'approved_at', 'completed_at']
    list_filter = ['status']
    readonly_fields = ['requested_at']
