"""
Payment confirmation

Online orders are finalized only after the payment collaborator reports a
confirmation. The storefront collects payment out of band (UPI QR code),
so confirmation arrives as an external signal.
"""

import asyncio
import logging
from typing import Optional, Protocol
from urllib.parse import quote

from ..models.checkout import PaymentOutcome

logger = logging.getLogger(__name__)


class PaymentGateway(Protocol):
    async def confirm_payment(
        self,
        amount: float,
        reference: str,
        timeout: Optional[float] = None,
    ) -> PaymentOutcome:
        ...


class AutoConfirmGateway:
    """Confirms every payment immediately (development and demos)"""

    async def confirm_payment(
        self,
        amount: float,
        reference: str,
        timeout: Optional[float] = None,
    ) -> PaymentOutcome:
        logger.info(f"Auto-confirming payment {reference} for {amount}")
        return PaymentOutcome.CONFIRMED


class ManualPaymentGateway:
    """
    Waits for an external confirm/cancel signal per payment reference.

    Usage:
        gateway = ManualPaymentGateway()
        outcome_task = asyncio.create_task(gateway.confirm_payment(250, "cart-1", timeout=600))
        ...
        gateway.confirm("cart-1")   # shopper pressed "I've completed payment"
    """

    def __init__(self):
        self._pending: dict[str, asyncio.Future] = {}

    @property
    def pending_references(self) -> list[str]:
        return list(self._pending)

    async def confirm_payment(
        self,
        amount: float,
        reference: str,
        timeout: Optional[float] = None,
    ) -> PaymentOutcome:
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        previous = self._pending.get(reference)
        if previous is not None and not previous.done():
            # A newer attempt for the same reference supersedes the old one
            previous.set_result(PaymentOutcome.CANCELLED)
        self._pending[reference] = future
        logger.info(f"Awaiting payment {reference} for {amount} (timeout={timeout}s)")

        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Payment {reference} timed out after {timeout}s")
            return PaymentOutcome.TIMED_OUT
        finally:
            if self._pending.get(reference) is future:
                del self._pending[reference]

    def confirm(self, reference: str) -> bool:
        """Signal a completed payment; False if nothing is awaiting it"""
        return self._resolve(reference, PaymentOutcome.CONFIRMED)

    def cancel(self, reference: str) -> bool:
        """Signal that the shopper backed out of payment"""
        return self._resolve(reference, PaymentOutcome.CANCELLED)

    def _resolve(self, reference: str, outcome: PaymentOutcome) -> bool:
        future = self._pending.get(reference)
        if future is None or future.done():
            return False
        future.set_result(outcome)
        return True


def build_upi_uri(payee: str, payee_name: str, amount: float, currency: str = "INR") -> str:
    """UPI deep link encoded into the payment QR code"""
    amount_text = str(int(amount)) if float(amount).is_integer() else f"{amount:.2f}"
    return (
        f"upi://pay?pa={quote(payee, safe='@.')}&pn={quote(payee_name)}"
        f"&am={amount_text}&cu={currency}"
    )
