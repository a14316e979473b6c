"""
Availability API Views
"""

from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.services import AvailabilityService
from apps.api.serializers import AvailabilityQuerySerializer, DailyAvailabilitySerializer


class DailyAvailabilityView(APIView):
    """Room-by-slot availability for one day; today when no date is given."""

    permission_classes = [AllowAny]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.availability_service = AvailabilityService()

    def get(self, request):
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        target_date = query.validated_data.get('date') or self.availability_service.clock.today()

        availability = self.availability_service.get_daily_availability(target_date)
        return Response(DailyAvailabilitySerializer(availability).data)
