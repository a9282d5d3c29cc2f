from rest_framework import serializers

from hospitals.models import CallPriority, CallStatus


class HospitalSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    lat = serializers.FloatField()
    lng = serializers.FloatField()
    type = serializers.CharField(source="type.value")
    emergency_level = serializers.CharField(source="emergency_level.value")
    capacity = serializers.CharField(source="capacity.value")
    specialties = serializers.SerializerMethodField()
    cost = serializers.SerializerMethodField()
    phone = serializers.CharField(allow_null=True)
    available = serializers.BooleanField()
    last_updated = serializers.DateTimeField(allow_null=True)

    def get_specialties(self, hospital):
        return sorted(hospital.specialties)

    def get_cost(self, hospital):
        return hospital.cost.value if hospital.cost else None


class RankedHospitalSerializer(serializers.Serializer):
    """
    Hospital fields flattened together with the routing metrics.
    """
    distance = serializers.FloatField()
    estimated_time = serializers.IntegerField()
    traffic_factor = serializers.FloatField()
    route_coordinates = serializers.SerializerMethodField()
    recommendation = serializers.CharField()

    def get_route_coordinates(self, ranked):
        return [[lat, lng] for lat, lng in ranked.route_coordinates]

    def to_representation(self, instance):
        data = dict(HospitalSerializer(instance.hospital).data)
        data.update(super().to_representation(instance))
        return data


class RouteEstimateSerializer(serializers.Serializer):
    coordinates = serializers.SerializerMethodField()
    distance = serializers.FloatField(source="distance_km")
    estimated_time = serializers.IntegerField(source="eta_minutes")
    traffic_factor = serializers.FloatField()
    congestion_factor = serializers.FloatField()

    def get_coordinates(self, route):
        return [[lat, lng] for lat, lng in route.polyline]


class EmergencyCallSerializer(serializers.Serializer):
    id = serializers.CharField()
    location = serializers.CharField()
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()
    emergency_type = serializers.CharField()
    priority = serializers.CharField(source="priority.value")
    status = serializers.CharField(source="status.value")
    selected_hospital_id = serializers.CharField(allow_null=True)
    estimated_time = serializers.IntegerField(allow_null=True)
    distance = serializers.FloatField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class AmbulanceSerializer(serializers.Serializer):
    id = serializers.CharField()
    status = serializers.CharField(source="status.value")
    current_latitude = serializers.FloatField(allow_null=True)
    current_longitude = serializers.FloatField(allow_null=True)
    emergency_call_id = serializers.CharField(allow_null=True)
    last_updated = serializers.DateTimeField()


# --- Request payloads ---

class NearestHospitalsQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
    emergency_type = serializers.CharField()
    count = serializers.IntegerField(required=False, min_value=0)
    suitable_only = serializers.BooleanField(required=False)


class RouteQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)


class AvailabilitySerializer(serializers.Serializer):
    available = serializers.BooleanField()
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class EmergencyCallCreateSerializer(serializers.Serializer):
    location = serializers.CharField()
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    emergency_type = serializers.CharField()
    priority = serializers.ChoiceField(choices=[priority.value for priority in CallPriority])


class EmergencyCallUpdateSerializer(serializers.Serializer):
    location = serializers.CharField(required=False)
    priority = serializers.ChoiceField(choices=[priority.value for priority in CallPriority], required=False)
    status = serializers.ChoiceField(choices=[status.value for status in CallStatus], required=False)
    selected_hospital_id = serializers.CharField(required=False, allow_null=True)
    estimated_time = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    distance = serializers.FloatField(required=False, allow_null=True, min_value=0)


class DispatchSerializer(serializers.Serializer):
    hospital_id = serializers.CharField()
    ambulance_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class AmbulanceLocationSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)


class AmbulanceAssignSerializer(serializers.Serializer):
    emergency_call_id = serializers.CharField()
