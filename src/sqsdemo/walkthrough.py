from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import typer

from sqsdemo.bus.sqs import SQSBus
from sqsdemo.models.product import SAMPLE_PRODUCTS, Product

logger = logging.getLogger(__name__)

MAX_RECEIVE_COUNT = "10"
RECEIVE_MESSAGE_WAIT_TIME = "2"
# receive calls always long-poll, whatever the queue's own wait time is
RECEIVE_WAIT_SECONDS = 2
DEAD_LETTER_SUFFIX = "__dlq"


@dataclass
class WalkthroughParams:
    queue_name: str
    dead_letter_queue_url: Optional[str] = None
    max_receive_count: str = MAX_RECEIVE_COUNT
    wait_time: str = RECEIVE_MESSAGE_WAIT_TIME


def show_all_attributes(bus: SQSBus, queue_url: str) -> None:
    attributes = bus.get_all_attributes(queue_url)
    typer.echo(f"Queue: {queue_url}")
    for name, value in attributes.items():
        typer.echo(f"\t{name}: {value}")


def show_queues(bus: SQSBus) -> None:
    typer.echo()
    for queue_url in bus.list_queues():
        show_all_attributes(bus, queue_url)


def provision_queues(bus: SQSBus, params: WalkthroughParams) -> Tuple[str, str]:
    """Create the message queue, and a dead-letter queue for it if none was given.

    Returns (queue_url, dead_letter_queue_url).
    """
    dead_letter_queue_url = params.dead_letter_queue_url
    if not dead_letter_queue_url:
        typer.echo("\nNo dead-letter queue was specified. Creating one...")
        dead_letter_queue_url = bus.create_queue(params.queue_name + DEAD_LETTER_SUFFIX)
        typer.echo("Your new dead-letter queue:")
        show_all_attributes(bus, dead_letter_queue_url)

    queue_url = bus.create_queue(
        params.queue_name,
        dead_letter_queue_url,
        params.max_receive_count,
        params.wait_time,
    )
    typer.echo("Your new message queue:")
    show_all_attributes(bus, queue_url)
    return queue_url, dead_letter_queue_url


def send_samples(bus: SQSBus, queue_url: str, products: Iterable[Product] = SAMPLE_PRODUCTS) -> int:
    sent = 0
    for product in products:
        bus.publish(queue_url, product.model_dump())
        sent += 1
    return sent


def drain(bus: SQSBus, queue_url: str, wait_time: int = RECEIVE_WAIT_SECONDS) -> List[Product]:
    """Receive, print and delete messages until a receive comes back empty."""
    received: List[Product] = []
    messages = bus.receive_messages(queue_url, wait_time)
    while messages:
        for msg in messages:
            product = Product.model_validate_json(msg["Body"])
            typer.echo("The product received is :")
            typer.echo(f"ID : {product.ProductID} Name : {product.ProductName}")
            logger.debug(
                f"Message {msg.get('MessageId')} receive count "
                f"{msg.get('Attributes', {}).get('ApproximateReceiveCount')}"
            )
            bus.delete_message(queue_url, msg["ReceiptHandle"])
            received.append(product)
        messages = bus.receive_messages(queue_url, wait_time)
    return received


def run_walkthrough(bus: SQSBus, params: WalkthroughParams) -> Dict[str, int]:
    queue_url, _ = provision_queues(bus, params)
    sent = send_samples(bus, queue_url)
    received = drain(bus, queue_url)
    stats = {"sent": sent, "received": len(received)}
    logger.info(f"Walkthrough finished for {queue_url}: {stats}")
    return stats
