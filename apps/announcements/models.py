from django.db import models
from django.utils import timezone


class AnnouncementQuerySet(models.QuerySet):
    def active(self, day=None):
        """Announcements whose date range covers ``day`` (today by default)"""
        day = day or timezone.localdate()
        return self.filter(start_date__lte=day, end_date__gte=day)


class Announcement(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField()
    start_date = models.DateField(default=timezone.localdate)
    end_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AnnouncementQuerySet.as_manager()

    class Meta:
        ordering = ['-start_date', '-created_at']

    def __str__(self):
        return self.title


class Event(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField()
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()

    class Meta:
        ordering = ['-start_time']

    def __str__(self):
        return self.title
