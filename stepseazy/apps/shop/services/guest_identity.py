import logging

from ..exceptions import ShopValidationError
from ..models import Customer

logger = logging.getLogger(__name__)


class GuestIdentityResolver:
    """Maps a bare name + phone to exactly one Customer row."""

    def __init__(self, repository):
        self.repository = repository

    def resolve_guest_customer(self, name, phone):
        name = (name or '').strip()
        phone = (phone or '').strip()
        if not name or not phone:
            raise ShopValidationError('Name and phone are required')

        # Insert first and fall back to a read: a read-then-insert would let two
        # concurrent submissions for one phone both see "absent".
        customer, created = self.repository.insert_if_absent(
            Customer, lookup={'phone': phone}, values={'name': name},
        )
        if created:
            logger.info("GUEST - created customer %s for phone %s", customer.id, phone)
        else:
            # First write wins; a guest form never renames an existing customer.
            logger.info("GUEST - phone %s matched existing customer %s", phone, customer.id)
        return customer
