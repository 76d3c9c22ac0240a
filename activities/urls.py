from django.urls import path

from .views import (
    ActivityListCreateView,
    ActivityDetailView,
    ScorePreviewView,
    ReviewQueueView,
    ActivityReviewView,
    IssueMyCertificatesView,
    MyActivityStatsView,
    MyActivityReportView,
)

urlpatterns = [
    path("", ActivityListCreateView.as_view(), name="activity-list-create"),
    path("score-preview/", ScorePreviewView.as_view(), name="activity-score-preview"),
    path("review/", ReviewQueueView.as_view(), name="activity-review-queue"),
    path("certificates/issue/", IssueMyCertificatesView.as_view(), name="activity-certificates-issue"),
    path("me/stats/", MyActivityStatsView.as_view(), name="my-activity-stats"),
    path("me/report/", MyActivityReportView.as_view(), name="my-activity-report"),

    path("<str:activity_id>/", ActivityDetailView.as_view(), name="activity-detail"),
    path("<str:activity_id>/<str:action>/", ActivityReviewView.as_view(), name="activity-review"),
]
