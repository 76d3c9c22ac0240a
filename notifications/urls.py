from django.urls import path

from .views import MyNotificationsView, MarkNotificationReadView

urlpatterns = [
    path("me/", MyNotificationsView.as_view(), name="my-notifications"),
    path("<int:notification_id>/read/", MarkNotificationReadView.as_view(), name="notification-read"),
]
