from typing import List, Optional
from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    # prompt is checked in the handler so an empty or missing one maps to 400
    prompt: Optional[str] = None
    # 0 or absent falls back to the default budget
    max_tokens: Optional[int] = Field(default=None, ge=0)
    temperature: Optional[float] = None
    model: Optional[str] = None


class GenerateResponse(BaseModel):
    response: str
    model_used: str


class HealthResponse(BaseModel):
    status: str
    service: str
    available_models: List[str] = []


class ServiceInfo(BaseModel):
    message: str
    version: str
    features: str
