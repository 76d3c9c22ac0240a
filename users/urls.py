# users/urls.py

from django.urls import path
from .views import MeView, ProfileView

urlpatterns = [
    path('me/', MeView.as_view(), name='user-me'),
    path('profile/', ProfileView.as_view(), name='user-profile'),
]
