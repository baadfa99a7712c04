from decimal import Decimal
from typing import Annotated, Any, Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Monetary amounts are exact Decimals internally and JSON numbers on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

class CamelModel(BaseModel):
    """Versioned API models: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = "Operation successful"
    data: Optional[T] = None

class ActionResult(BaseModel):
    success: bool
    message: str

def envelope(data: Any = None, message: str = "Operation successful") -> dict:
    """Wrap a payload in the versioned API envelope."""
    return {"success": True, "message": message, "data": data}
