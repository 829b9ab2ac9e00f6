# med_appointments/schemas/common/common.py
from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
