from bakusam.models.notification import Notification
from bakusam.services.resource_service import ResourceService

class NotificationService(ResourceService):
    model = Notification
    name = "notification"
    fields = {
        "title": "title",
        "message": "message",
        "type": "type",
        "targetType": "target_type",
        "isRead": "is_read",
        "createdDate": "created_date",
    }
    required_fields = ["title", "message", "type", "targetType"]
    read_only_fields = {"createdDate"}
