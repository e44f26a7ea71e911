from pydantic import BaseModel
from typing import List


class StoredUpload(BaseModel):
    original_name: str
    content_type: str
    path: str
    size: int


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    message: str
    images: List[str]
