"""
Payment Methods Use Case

Exposes which channels and fields each payment method takes, so a client can
render the right inputs.
"""
from typing import List
from libs.result import Result, Return
from src.domain.reconciliation import PAYMENT_METHOD_RULES
from .dtos import PaymentMethodRuleDTO


class GetPaymentMethods:
    async def execute(self) -> Result[List[PaymentMethodRuleDTO]]:
        return Return.ok(
            [
                PaymentMethodRuleDTO(
                    method=method.value,
                    label=rule.label,
                    channels=list(rule.channels),
                    required_fields=list(rule.required_fields),
                    optional_fields=list(rule.optional_fields),
                )
                for method, rule in PAYMENT_METHOD_RULES.items()
            ]
        )
