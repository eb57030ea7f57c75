from bakusam.models.driver import Driver
from bakusam.services.resource_service import ResourceService

class DriverService(ResourceService):
    model = Driver
    name = "driver"
    fields = {
        "fullName": "full_name",
        "phone": "phone",
        "email": "email",
        "nik": "nik",
        "address": "address",
        "simNumber": "sim_number",
        "vehicleType": "vehicle_type",
        "status": "status",
        "rating": "rating",
        "totalOrders": "total_orders",
        "joinDate": "join_date",
        "latitude": "latitude",
        "longitude": "longitude",
        "commission": "commission",
        "balance": "balance",
    }
    required_fields = ["fullName", "phone", "email", "nik", "address", "simNumber", "vehicleType"]
    read_only_fields = {"totalOrders", "joinDate"}
