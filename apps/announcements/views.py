from django.urls import reverse_lazy

from apps.corecode.identity import ROLES
from apps.corecode.mixins import (
    ObjectCreateView,
    ObjectDeleteView,
    ObjectListView,
    ObjectUpdateView,
)

from .forms import AnnouncementForm, EventForm
from .models import Announcement, Event


class AnnouncementListView(ObjectListView):
    model = Announcement
    allowed_roles = ROLES
    columns = (("Title", "title"), ("Description", "description"),
               ("Start", "start_date"), ("End", "end_date"))
    search_fields = ("title",)
    create_url_name = "announcements:announcement_create"
    update_url_name = "announcements:announcement_update"
    delete_url_name = "announcements:announcement_delete"


class AnnouncementCreateView(ObjectCreateView):
    model = Announcement
    form_class = AnnouncementForm
    success_url = reverse_lazy("announcements:announcement_list")


class AnnouncementUpdateView(ObjectUpdateView):
    model = Announcement
    form_class = AnnouncementForm
    success_url = reverse_lazy("announcements:announcement_list")


class AnnouncementDeleteView(ObjectDeleteView):
    model = Announcement
    success_url = reverse_lazy("announcements:announcement_list")


class EventListView(ObjectListView):
    model = Event
    allowed_roles = ROLES
    columns = (("Title", "title"), ("Description", "description"),
               ("Start", "start_time"), ("End", "end_time"))
    search_fields = ("title",)
    create_url_name = "announcements:event_create"
    update_url_name = "announcements:event_update"
    delete_url_name = "announcements:event_delete"


class EventCreateView(ObjectCreateView):
    model = Event
    form_class = EventForm
    success_url = reverse_lazy("announcements:event_list")


class EventUpdateView(ObjectUpdateView):
    model = Event
    form_class = EventForm
    success_url = reverse_lazy("announcements:event_list")


class EventDeleteView(ObjectDeleteView):
    model = Event
    success_url = reverse_lazy("announcements:event_list")
