from .events import EventListCreateView
from .registrations import RegisterEventView, MyRegistrationsView

__all__ = [
    "EventListCreateView",
    "RegisterEventView",
    "MyRegistrationsView",
]
