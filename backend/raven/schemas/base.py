"""
Base schemas with standardized field types for consistent API responses.

Wire JSON is camelCase (``daySlotId``, ``totalPrice``); Python attributes stay
snake_case. Requests accept either spelling.
"""

from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class StrictCamelRequest(CamelModel):
    """Request DTO base that forbids unexpected fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class Money(Decimal):
    """Decimal amount (money or hours) that always serializes as float"""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        def validate_money(value: Any) -> Decimal:
            if isinstance(value, (int, float)):
                return Decimal(str(value))
            if isinstance(value, str):
                return Decimal(value)
            if isinstance(value, Decimal):
                return value
            raise ValueError(f"Cannot convert {type(value)} to Money")

        return core_schema.no_info_after_validator_function(
            validate_money,
            core_schema.union_schema(
                [
                    core_schema.int_schema(),
                    core_schema.float_schema(),
                    core_schema.str_schema(),
                    core_schema.is_instance_schema(Decimal),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                float,
                info_arg=False,
                return_schema=core_schema.float_schema(),
            ),
        )


class ListResponse(CamelModel, Generic[T]):
    """``{data, count}`` envelope used by list endpoints."""

    data: list[T] = Field(default_factory=list)
    count: int = 0


class ApiResponse(BaseModel, Generic[T]):
    """``{success, data?, error?, details?}`` envelope used by the analytics endpoints."""

    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None
    details: Optional[str] = None
