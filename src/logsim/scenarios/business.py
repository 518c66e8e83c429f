"""Business events: orders, payments and inventory."""

from .. import domains
from ..classifier import classify_outcome
from ..events import Level, LogEvent
from .base import ScenarioContext, scenario

CATEGORY = "business"


@scenario("order_created", category=CATEGORY, description="New order with amount and items")
def order_created(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Order created",
        CATEGORY,
        event="order_created",
        orderId=ctx.ids.order_id(),
        userId=ctx.choice(domains.USERS, "user_1"),
        amount=ctx.amount(1, 1000),
        currency=ctx.choice(domains.CURRENCIES, "USD"),
        items=ctx.between(1, 10),
        paymentMethod=ctx.choice(domains.PAYMENT_METHODS, "credit_card"),
    )


@scenario(
    "payment_processed",
    category=CATEGORY,
    description="Payment outcome; failed is an error, refunded a warning",
)
def payment_processed(ctx: ScenarioContext) -> LogEvent:
    status = ctx.choice(domains.PAYMENT_STATUSES, "pending")
    return ctx.event(
        classify_outcome(status),
        "Payment processed",
        CATEGORY,
        event="payment_processed",
        transactionId=ctx.ids.transaction_id(),
        status=status,
        amount=ctx.amount(5, 505),
        processingTime=ctx.below(3000),
        gateway=ctx.choice(domains.PAYMENT_GATEWAYS, "stripe"),
        failureReason=(
            ctx.choice(domains.PAYMENT_FAILURE_REASONS, "timeout") if status == "failed" else None
        ),
    )


@scenario("inventory_change", category=CATEGORY, description="Stock movement in a warehouse")
def inventory_change(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Inventory update",
        CATEGORY,
        event="inventory_change",
        productId=f"PROD-{ctx.below(500)}",
        previousStock=ctx.below(100) + 20,
        newStock=ctx.below(100),
        change=-ctx.between(1, 10),
        warehouse=ctx.choice(domains.WAREHOUSES, "warehouse-a"),
    )
