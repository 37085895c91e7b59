"""
Database enums mirroring schema enums.

The string values are what the API sends and receives.
"""

import enum


class EquipmentStatus(str, enum.Enum):
    """Current state of a physical equipment item."""
    AVAILABLE = "available"
    IN_USE = "in-use"
    BROKEN = "broken"


class TicketStatus(str, enum.Enum):
    """Complaint ticket status."""
    OPEN = "open"
    IN_PROCESS = "in-process"
    CLOSED = "closed"


ACTIVE_TICKET_STATUSES = (TicketStatus.OPEN, TicketStatus.IN_PROCESS)


def enum_values(enum_cls):
    """Persist enum values ("in-use") rather than member names ("IN_USE")."""
    return [member.value for member in enum_cls]
