from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

class ErrorInfo(BaseModel):
    field: Optional[str] = None
    msg: str

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: Optional[str] = None
    errors: Optional[List[ErrorInfo]] = None
    details: Optional[Dict[str, Any]] = None

class MessageResponse(BaseModel):
    message: str

class Page(BaseModel, Generic[T]):
    """A window of rows plus the total number of rows available."""
    result: List[T]
    total: int
