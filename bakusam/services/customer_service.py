from bakusam.models.customer import Customer
from bakusam.services.resource_service import ResourceService

class CustomerService(ResourceService):
    model = Customer
    name = "customer"
    fields = {
        "fullName": "full_name",
        "phone": "phone",
        "email": "email",
        "address": "address",
        "status": "status",
        "totalOrders": "total_orders",
        "joinDate": "join_date",
    }
    required_fields = ["fullName", "phone", "email"]
    read_only_fields = {"totalOrders", "joinDate"}
