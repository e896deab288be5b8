from travelcrm.models.customer import Customer
from travelcrm.models.destination import Destination, DestinationStatus
from travelcrm.models.staff import Staff, StaffRole

__all__ = [
    "Customer",
    "Destination",
    "DestinationStatus",
    "Staff",
    "StaffRole",
]
