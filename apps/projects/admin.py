from django.contrib import admin
from .models import Project, ProjectParticipant


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'status', 'current_participants', 'max_participants', 'creator', 'created_at']
    list_filter = ['status', 'category']
    search_fields = ['title', 'description', 'category']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(ProjectParticipant)
class ProjectParticipantAdmin(admin.ModelAdmin):
    list_display = ['project', 'user', 'status', 'joined_at']
    list_filter = ['status']
