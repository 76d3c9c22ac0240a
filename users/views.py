# users/views.py
import logging

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.storage import profile_photo_path, upload_file
from .models import Profile
from .serializers import ProfileSerializer, UserSerializer

logger = logging.getLogger('fdp.users')


class MeView(APIView):
    """
    GET /api/users/me/
    Return current user info
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)


class ProfileView(APIView):
    """
    GET /api/users/profile/   -> stored profile, or a blank one pre-filled
                                 with the account email
    PUT /api/users/profile/   -> create or replace (multipart; optional "photo")
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request):
        profile = Profile.objects.filter(user=request.user).first()
        if profile is None:
            return Response({
                'name': '',
                'email': request.user.email or '',
                'department': '',
                'phone': '',
                'designation': '',
                'employee_id': '',
                'photo_url': '',
                'updated_at': None,
                'exists': False,
            })

        data = ProfileSerializer(profile).data
        data['exists'] = True
        return Response(data)

    def put(self, request):
        profile = Profile.objects.filter(user=request.user).first()
        serializer = ProfileSerializer(profile, data=request.data)
        serializer.is_valid(raise_exception=True)

        extra = {}
        if not serializer.validated_data.get('email') and not getattr(profile, 'email', ''):
            extra['email'] = request.user.email or ''

        photo = request.FILES.get('photo')
        if photo is not None:
            extra['photo_url'] = upload_file(profile_photo_path(request.user.pk), photo)
            logger.info(f"Profile photo uploaded for user {request.user.pk}")

        created = profile is None
        profile = serializer.save(user=request.user, **extra)
        logger.info(f"Profile {'created' if created else 'updated'} for user {request.user.pk}")

        data = ProfileSerializer(profile).data
        data['exists'] = True
        return Response(data, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)
