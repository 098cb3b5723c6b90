from pydantic import BaseModel


class PhotoUploadResponse(BaseModel):
    message: str
    filename: str
