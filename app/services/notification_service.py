# app/services/notification_service.py
from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, processed asynchronously by Celery.
    """

    @staticmethod
    def send_order_notification(user_id: str, order_id: str, item_count: int, order_value: str):
        send_order_notification_task.delay(user_id, order_id, item_count, order_value)


@celery_app.task(name="app.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str, item_count: int, order_value: str):
    """
    Order-placed notification. A real deployment would hand this to an
    email or push gateway; here it is only logged.
    """
    logger.info(
        f"[NOTIFICATION] User {user_id}: order {order_id} placed, "
        f"{item_count} items, value {order_value}"
    )

    return {
        "user_id": user_id,
        "order_id": order_id,
        "item_count": item_count,
        "order_value": order_value,
        "status": "sent",
    }
