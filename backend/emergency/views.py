from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from routing.route_service import generate_route_instructions

from .serializers import (
    AmbulanceAssignSerializer,
    AmbulanceLocationSerializer,
    AmbulanceSerializer,
    AvailabilitySerializer,
    DispatchSerializer,
    EmergencyCallCreateSerializer,
    EmergencyCallSerializer,
    EmergencyCallUpdateSerializer,
    HospitalSerializer,
    NearestHospitalsQuerySerializer,
    RankedHospitalSerializer,
    RouteEstimateSerializer,
    RouteQuerySerializer,
)
from .services import get_dispatcher


class HospitalViewSet(viewsets.ViewSet):
    """
    Hospitals on the map.
    - List all hospitals (any availability)
    - Rank the nearest available hospitals for an emergency
    - Toggle availability, re-check the route to one hospital
    """

    def list(self, request):
        hospitals = get_dispatcher().list_hospitals()
        return Response(HospitalSerializer(hospitals, many=True).data)

    @action(detail=False, methods=["get"])
    def nearest(self, request):
        query = NearestHospitalsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        # missing boolean query params parse as False; None keeps the policy default
        suitable_only = params.get("suitable_only") if "suitable_only" in request.query_params else None

        ranked = get_dispatcher().rank_nearest_hospitals(
            params["lat"],
            params["lng"],
            params["emergency_type"],
            params.get("count"),
            suitable_only=suitable_only,
        )
        return Response(RankedHospitalSerializer(ranked, many=True).data)

    @action(detail=True, methods=["patch"])
    def availability(self, request, pk=None):
        payload = AvailabilitySerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        hospital = get_dispatcher().update_hospital_availability(
            pk,
            payload.validated_data["available"],
            reason=payload.validated_data.get("reason"),
        )
        return Response(HospitalSerializer(hospital).data)

    @action(detail=True, methods=["get"])
    def route(self, request, pk=None):
        query = RouteQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        dispatcher = get_dispatcher()
        origin = (query.validated_data["lat"], query.validated_data["lng"])
        hospital, route = dispatcher.estimate_route_to(pk, *origin)
        zone, traffic_level = dispatcher.traffic_status(hospital.lat, hospital.lng)

        return Response({
            "hospital": HospitalSerializer(hospital).data,
            "route": RouteEstimateSerializer(route).data,
            "instructions": generate_route_instructions(origin, hospital.location, hospital.name),
            "traffic": {"zone": zone.name if zone else None, "level": traffic_level},
        })


class EmergencyCallViewSet(viewsets.ViewSet):
    """
    Emergency calls filed by operators.
    list returns only active / dispatched calls.
    """

    def list(self, request):
        calls = get_dispatcher().list_active_emergency_calls()
        return Response(EmergencyCallSerializer(calls, many=True).data)

    def create(self, request):
        payload = EmergencyCallCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        call = get_dispatcher().create_emergency_call(**payload.validated_data)
        return Response(EmergencyCallSerializer(call).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        call = get_dispatcher().get_emergency_call(pk)
        return Response(EmergencyCallSerializer(call).data)

    def partial_update(self, request, pk=None):
        payload = EmergencyCallUpdateSerializer(data=request.data, partial=True)
        payload.is_valid(raise_exception=True)

        call = get_dispatcher().update_emergency_call(pk, **payload.validated_data)
        return Response(EmergencyCallSerializer(call).data)

    @action(detail=False, methods=["post"])
    def intake(self, request):
        """
        File a call and get the nearest hospitals in one request.
        """
        payload = EmergencyCallCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        intake = get_dispatcher().file_emergency(**payload.validated_data)
        recommended = intake.recommended_hospital
        return Response(
            {
                "emergency_id": intake.call.id,
                "nearest_hospitals": RankedHospitalSerializer(intake.nearest_hospitals, many=True).data,
                "estimated_dispatch_time": intake.estimated_dispatch_time,
                "recommended_hospital": RankedHospitalSerializer(recommended).data if recommended else None,
            },
            status=status.HTTP_201_CREATED,
        )

    # named so it does not shadow APIView.dispatch
    @action(detail=True, methods=["post"], url_path="dispatch")
    def dispatch_call(self, request, pk=None):
        payload = DispatchSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        call = get_dispatcher().dispatch(
            pk,
            payload.validated_data["hospital_id"],
            ambulance_id=payload.validated_data.get("ambulance_id") or None,
        )
        return Response(EmergencyCallSerializer(call).data)


class AmbulanceViewSet(viewsets.ViewSet):

    def list(self, request):
        ambulances = get_dispatcher().list_ambulances()
        return Response(AmbulanceSerializer(ambulances, many=True).data)

    @action(detail=True, methods=["patch"])
    def location(self, request, pk=None):
        payload = AmbulanceLocationSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        ambulance = get_dispatcher().update_ambulance_location(
            pk,
            payload.validated_data["latitude"],
            payload.validated_data["longitude"],
        )
        return Response(AmbulanceSerializer(ambulance).data)

    @action(detail=True, methods=["post"])
    def assign(self, request, pk=None):
        payload = AmbulanceAssignSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        ambulance = get_dispatcher().assign_ambulance(pk, payload.validated_data["emergency_call_id"])
        return Response(AmbulanceSerializer(ambulance).data)


class SystemStatusView(APIView):

    def get(self, request):
        snapshot = get_dispatcher().system_status()
        return Response({
            "hospitals": {
                "total": snapshot.hospitals_total,
                "available": snapshot.hospitals_available,
                "availability_percentage": snapshot.availability_percentage,
            },
            "ambulances": {
                "total": snapshot.ambulances_total,
                "available": snapshot.ambulances_available,
                "en_route": snapshot.ambulances_en_route,
                "maintenance": snapshot.ambulances_maintenance,
            },
            "emergencies": {
                "active": snapshot.active_emergencies,
            },
            "metrics": {
                "average_response_time": snapshot.average_response_time,
            },
            "timestamp": snapshot.timestamp.isoformat(),
        })
