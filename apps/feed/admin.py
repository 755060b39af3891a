from django.contrib import admin
from .models import Announcement, AnnouncementLike, Comment


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'announcement_type', 'author', 'likes', 'comments_count', 'created_at']
    list_filter = ['announcement_type']
    search_fields = ['title', 'content']
    readonly_fields = ['likes', 'comments_count', 'created_at', 'updated_at']


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ['announcement', 'user', 'created_at']
    search_fields = ['content']


admin.site.register(AnnouncementLike)
