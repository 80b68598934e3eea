"""Pydantic models for the auth and chat endpoints."""
from pydantic import BaseModel, Field
from typing import List, Optional

class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""

class ImageSuggestion(BaseModel):
    url: str
    name: str
    price: Optional[float] = None

class ChatResponse(BaseModel):
    reply: str
    images: List[ImageSuggestion] = Field(default_factory=list)
