from django.urls import path
from .views import (
    EventListCreateView,
    RegisterEventView,
    MyRegistrationsView,
)

urlpatterns = [
    path("", EventListCreateView.as_view(), name="event-list"),
    path("<int:event_id>/register/", RegisterEventView.as_view(), name="event-register"),
    path("me/registrations/", MyRegistrationsView.as_view(), name="my-registrations"),
]
