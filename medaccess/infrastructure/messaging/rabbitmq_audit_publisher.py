# medaccess/infrastructure/messaging/rabbitmq_audit_publisher.py

import json

import aio_pika

from medaccess.governance.audit_models import AuditRecord

ROUTING_PREFIX = "audit."


class RabbitMQAuditPublisher:
    """Publishes audit records to a durable topic exchange. Implements AuditRepository."""

    def __init__(self, url: str, exchange_name: str):
        self._url = url
        self._exchange_name = exchange_name
        self._connection = None
        self._channel = None
        self._exchange = None

    async def connect(self):
        self._connection = await aio_pika.connect_robust(self._url)
        self._channel = await self._connection.channel()
        self._exchange = await self._channel.declare_exchange(
            self._exchange_name,
            aio_pika.ExchangeType.TOPIC,
            durable=True,
        )

    async def save(self, record: AuditRecord) -> None:
        if not self._exchange:
            await self.connect()

        msg = aio_pika.Message(
            body=json.dumps(record.to_dict()).encode(),
            content_type="application/json",
            delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            message_id=str(record.sequence),
            headers={
                "correlation_id": record.correlation_id or "",
            },
        )

        await self._exchange.publish(msg, routing_key=f"{ROUTING_PREFIX}{record.event_type.value}")

    async def close(self):
        if self._connection:
            await self._connection.close()
            self._connection = None
            self._channel = None
            self._exchange = None
