# profile_processor/schemas.py
from typing import Any, Dict, List
from pydantic import BaseModel

class BatchMetadata(BaseModel):
    processed: int          # normalized profiles returned
    filtered: int           # profiles left after dropping items without a urn
    total: int              # items received
    failed: int = 0         # profiles rejected (undecodable username)
    processingTimeMs: int

class RecordError(BaseModel):
    index: int              # position among the filtered profiles
    urn: Any = None
    error: str

class ProcessResponse(BaseModel):
    items: List[Dict[str, Any]]
    metadata: BatchMetadata
    errors: List[RecordError] = []

class SampleRunResponse(BaseModel):
    message: str
    items: List[Dict[str, Any]]
    processed: int
