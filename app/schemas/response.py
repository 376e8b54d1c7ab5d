#app/schemas/response.py
from pydantic import BaseModel, Field
from app.core.exceptions import ErrorCode

class ErrorDetail(BaseModel):
    """
    ErrorDetail — описание ошибки (машиночитаемый код + сообщение).
    """
    code: ErrorCode = Field(..., examples=["NOT_FOUND"], description="Код ошибки")
    message: str = Field(..., examples=["PR 'pr-1001' not found"], description="Сообщение об ошибке")

class ErrorResponse(BaseModel):
    """
    ErrorResponse — стандартная структура для ошибки.
    """
    error: ErrorDetail

class HealthResponse(BaseModel):
    ok: bool = True
