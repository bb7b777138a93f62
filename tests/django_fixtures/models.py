from __future__ import annotations

from django.db import models


class CaseRecord(models.Model):
    title = models.CharField(max_length=128)
    created_by = models.IntegerField()
    assigned_to = models.IntegerField(null=True)

    class Meta:
        app_label = "casedesk_fixtures"
        ordering = ["id"]


class NotificationRecord(models.Model):
    user_id = models.IntegerField()
    trigger_user_id = models.IntegerField(null=True)
    message = models.CharField(max_length=255)

    class Meta:
        app_label = "casedesk_fixtures"
        ordering = ["id"]
