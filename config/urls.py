"""
URL configuration for SkillLink project.
"""
from django.contrib import admin
from django.urls import path
from ninja import NinjaAPI

api = NinjaAPI(
    title="SkillLink API",
    version="1.0.0",
    description="Student networking and marketplace API",
    docs_url="/docs",
)

from apps.identity.api import auth_router, users_router
from apps.projects.api import router as projects_router
from apps.jobs.api import router as jobs_router
from apps.marketplace.api import router as marketplace_router
from apps.feed.api import router as feed_router
from apps.messaging.api import router as messaging_router, conversations_router
from apps.network.api import router as network_router
from apps.moderation.api import router as moderation_router

api.add_router("/auth/", auth_router)
api.add_router("/users/", users_router)
api.add_router("/projects/", projects_router)
api.add_router("/jobs/", jobs_router)
api.add_router("/services/", marketplace_router)
api.add_router("/announcements/", feed_router)
api.add_router("/messages/", messaging_router)
api.add_router("/conversations/", conversations_router)
api.add_router("/connections/", network_router)
api.add_router("/admin/", moderation_router)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]
