import uuid
from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    """
    One moderation action: who did what to which object, and when.

    Targets are referenced by type name and id only, so entries survive
    the deletion of the object they describe.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    action = models.CharField(max_length=50)
    target_type = models.CharField(max_length=50)
    target_id = models.UUIDField()
    target_label = models.CharField(max_length=255, blank=True)
    context = models.JSONField(default=dict, blank=True)

    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='audit_logs'
    )
    performed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-performed_at']
        indexes = [
            models.Index(fields=['action', 'performed_at'], name='moderation_action_idx'),
        ]

    def __str__(self):
        return f"{self.action} {self.target_type} {self.target_id}"
