"""
Occupant/account summaries embedded in equipment and history payloads.
"""

from typing import Optional

from pydantic import Field

from smart_sac.schemas.common.base import BaseSchema

__all__ = ["OccupantSummary"]


class OccupantSummary(BaseSchema):
    """
    Who holds (or held) an item.

    For a registered student every field is filled; for an unregistered
    occupant only `roll_no` is known.
    """

    id: Optional[str] = Field(default=None, description="Account ID when registered")
    fullname: Optional[str] = None
    email: Optional[str] = None
    roll_no: Optional[str] = None
    phone_number: Optional[str] = None
