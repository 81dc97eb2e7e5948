"""
API request/response models
Pydantic models for FastAPI endpoints, camelCase on the wire
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    """
    Analysis request body.

    Required fields are optional here so that missing values reach the
    handler and come back as a 400 with an error message.
    """
    model_config = ConfigDict(populate_by_name=True)

    selected_text: Optional[str] = Field(default=None, alias="selectedText")
    question: Optional[str] = None
    page_url: Optional[str] = Field(default=None, alias="pageUrl")
    page_content: Optional[str] = Field(default=None, alias="pageContent")


class Usage(BaseModel):
    """Input sizes in characters"""
    model_config = ConfigDict(populate_by_name=True)

    selected_text_length: int = Field(alias="selectedTextLength")
    question_length: int = Field(alias="questionLength")
    page_content_length: int = Field(alias="pageContentLength")


class AnalyzeResponse(BaseModel):
    answer: str
    usage: Usage


class ErrorResponse(BaseModel):
    error: str


class UsageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    caller_id: str = Field(alias="callerId")
    usage: int
    limit: int
    date: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    models: List[str]


class KeyTestResponse(BaseModel):
    status: str
    message: str
    response: str
    timestamp: str
