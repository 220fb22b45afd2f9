"""List prices per ticket class"""

from decimal import Decimal

from ..models.ticket import TicketClass


DEFAULT_TICKET_PRICES = {
    TicketClass.FREE: Decimal("0"),
    TicketClass.STANDARD: Decimal("150.00"),
    TicketClass.VIP: Decimal("450.00"),
    TicketClass.BACKSTAGE: Decimal("1200.00"),
}
