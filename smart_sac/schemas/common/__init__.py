from smart_sac.schemas.common.base import BaseSchema, BaseResponseSchema, BaseCreateSchema
from smart_sac.schemas.common.pagination import PaginationParams
from smart_sac.schemas.common.response import ErrorDetail, ErrorResponse, SuccessResponse

__all__ = [
    "BaseSchema",
    "BaseResponseSchema",
    "BaseCreateSchema",
    "PaginationParams",
    "ErrorDetail",
    "ErrorResponse",
    "SuccessResponse",
]
