# models/pipeline_config.py
from pydantic import BaseModel, field_validator
from typing import List, Optional
import logging

DEFAULT_MAX_DOCUMENT_BYTES = 5 * 1024 * 1024


class PipelineSettings(BaseModel):
    max_document_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES
    log_level: str = "INFO"

    @field_validator("max_document_bytes")
    @classmethod
    def validate_max_document_bytes(cls, v):
        if v <= 0:
            raise ValueError(f"max_document_bytes must be positive, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = str(v).upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


class ResponseInput(BaseModel):
    """One saved CRM response and the call it answered"""
    path: str
    module: str
    method: str


class OutputSettings(BaseModel):
    path: Optional[str] = None


class PipelineConfig(BaseModel):
    settings: PipelineSettings = PipelineSettings()
    inputs: List[ResponseInput] = []
    output: OutputSettings = OutputSettings()
