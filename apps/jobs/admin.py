from django.contrib import admin
from .models import JobOffer, JobApplication


@admin.register(JobOffer)
class JobOfferAdmin(admin.ModelAdmin):
    list_display = ['title', 'company', 'job_type', 'status', 'poster', 'created_at']
    list_filter = ['job_type', 'status']
    search_fields = ['title', 'company', 'location']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(JobApplication)
class JobApplicationAdmin(admin.ModelAdmin):
    list_display = ['job', 'user', 'status', 'applied_at']
    list_filter = ['status']
