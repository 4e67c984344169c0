# freshconnect/services/notification_service.py
from decimal import Decimal

from freshconnect.celery_worker import celery_app
from freshconnect.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """Queues "order placed" messages for the consumer on Celery."""

    @staticmethod
    def send_order_notification(consumer_id: int, order_id: int, total_amount: Decimal, item_count: int):
        # json serializer: money travels as a string
        send_order_notification_task.delay(consumer_id, order_id, str(total_amount), item_count)


@celery_app.task(name="freshconnect.services.notification_service.send_order_notification_task")
def send_order_notification_task(consumer_id: int, order_id: int, total_amount: str, item_count: int):
    """
    Builds the order confirmation for the consumer. Delivery (SMS/email) is
    handled outside this service, so the message is logged and returned.
    """
    lines = "line" if item_count == 1 else "lines"
    message = f"Your order #{order_id} is placed: {item_count} {lines}, total Rs. {total_amount}"

    logger.info(
        "Order notification",
        consumer_id=consumer_id,
        order_id=order_id,
        total_amount=total_amount,
        item_count=item_count,
    )

    return {
        "consumer_id": consumer_id,
        "order_id": order_id,
        "message": message,
        "status": "sent",
    }
