from django.shortcuts import get_object_or_404
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework import status
from rest_framework.exceptions import ValidationError

from .models import Activity
from .permissions import IsOwnerOrReviewer, IsReviewer
from .reports import build_activity_report, get_activity_stats
from .scoring import score_breakdown
from .serializers import ActivitySerializer, ActivitySubmitSerializer, ReviewSerializer
from .services import approve_activity, reject_activity, review_queue, submit_activity
from .watcher import sweep_certificates


def _status_filter(request):
    requested = request.query_params.get("status")
    if requested and requested in dict(Activity.STATUS_CHOICES):
        return requested
    return None


class ActivityListCreateView(APIView):
    """
    GET  /api/activities/            -> my activities (newest first, ?status=)
    POST /api/activities/            -> submit (multipart; files under "evidence")
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request):
        qs = Activity.objects.filter(user=request.user).select_related("user", "reviewed_by")
        status_filter = _status_filter(request)
        if status_filter:
            qs = qs.filter(status=status_filter)

        serializer = ActivitySerializer(qs.order_by("-created_at"), many=True)
        return Response(serializer.data)

    def post(self, request):
        serializer = ActivitySubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        activity = submit_activity(
            request.user,
            serializer.validated_data,
            evidence_files=request.FILES.getlist("evidence"),
        )
        return Response(ActivitySerializer(activity).data, status=status.HTTP_201_CREATED)


class ActivityDetailView(APIView):
    permission_classes = [IsAuthenticated, IsOwnerOrReviewer]

    def get(self, request, activity_id):
        activity = get_object_or_404(
            Activity.objects.select_related("user", "reviewed_by"),
            pk=activity_id,
        )
        self.check_object_permissions(request, activity)
        return Response(ActivitySerializer(activity).data)


class ScorePreviewView(APIView):
    """
    GET /api/activities/score-preview/?type=fdp&role=speaker&hours=16

    Same formula the server applies on submit; never fails on odd input.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        params = request.query_params
        breakdown = score_breakdown(params.get("type"), params.get("role"), params.get("hours"))
        return Response(breakdown)


class ReviewQueueView(APIView):
    """
    GET /api/activities/review/?status=pending
    """
    permission_classes = [IsAuthenticated, IsReviewer]

    def get(self, request):
        qs = review_queue(request.user, status=_status_filter(request))
        return Response(ActivitySerializer(qs, many=True).data)


class ActivityReviewView(APIView):
    """
    POST /api/activities/<activity_id>/approve/   {"comment": "..."}   (optional)
    POST /api/activities/<activity_id>/reject/    {"comment": "..."}   (required)
    """
    permission_classes = [IsAuthenticated, IsReviewer]

    def post(self, request, activity_id, action):
        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = serializer.validated_data["comment"]

        if action == "approve":
            activity = approve_activity(request.user, activity_id, comment)
        elif action == "reject":
            activity = reject_activity(request.user, activity_id, comment)
        else:
            raise ValidationError({"action": "Invalid action. Use \"approve\" or \"reject\"."})

        return Response(ActivitySerializer(activity).data, status=status.HTTP_200_OK)


class IssueMyCertificatesView(APIView):
    """
    POST /api/activities/certificates/issue/

    Runs the certificate pass for the caller's approved activities, the
    server-side counterpart of the dashboard's auto-certificate hook.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        issued = sweep_certificates(request.user)
        return Response({"issued": issued}, status=status.HTTP_200_OK)


class MyActivityStatsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(get_activity_stats(request.user))


class MyActivityReportView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return build_activity_report(request.user)
