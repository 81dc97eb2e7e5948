"""
FastAPI application module for the Text Analyzer backend
"""
from .app import app
from .models import AnalyzeRequest, AnalyzeResponse

__all__ = ["app", "AnalyzeRequest", "AnalyzeResponse"]
