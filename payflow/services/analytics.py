"""
Payment analytics for the admin dashboard.

Success means the money is in: completed (automatic) or verified (manual).
"""
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from payflow import models
from payflow.models import PaymentStatus
from payflow.schemas.responses import DailyBreakdown, MethodBreakdown, PaymentSummary

SUCCESS_STATES = {PaymentStatus.COMPLETED.value, PaymentStatus.VERIFIED.value}


def _rate(successes: int, total: int) -> float:
    return round(successes / total, 4) if total else 0.0


def summarize(transactions: Iterable[models.PaymentTransaction]) -> PaymentSummary:
    transactions = list(transactions)
    total_amount = sum((Decimal(t.amount) for t in transactions), Decimal("0"))
    successes = sum(1 for t in transactions if t.status in SUCCESS_STATES)

    by_method = defaultdict(MethodBreakdown)
    method_successes = defaultdict(int)
    by_status = defaultdict(int)
    daily = {}

    for t in transactions:
        entry = by_method[t.payment_method]
        entry.count += 1
        entry.amount += Decimal(t.amount)
        if t.status in SUCCESS_STATES:
            method_successes[t.payment_method] += 1

        by_status[t.status] += 1

        day = t.created_at.date().isoformat()
        count, amount = daily.get(day, (0, Decimal("0")))
        daily[day] = (count + 1, amount + Decimal(t.amount))

    for method, entry in by_method.items():
        entry.success_rate = _rate(method_successes[method], entry.count)

    return PaymentSummary(
        total_transactions=len(transactions),
        total_amount=total_amount,
        success_rate=_rate(successes, len(transactions)),
        avg_transaction_amount=(
            (total_amount / len(transactions)).quantize(Decimal("0.01"))
            if transactions else Decimal("0")
        ),
        by_method=dict(by_method),
        by_status=dict(by_status),
        daily=[
            DailyBreakdown(date=day, transactions=count, amount=amount)
            for day, (count, amount) in sorted(daily.items())
        ],
    )
