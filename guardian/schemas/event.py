from datetime import datetime
from typing import Optional

from guardian.schemas.base import CamelModel


class LoginEventOut(CamelModel):
    id: int
    user_id: Optional[int]
    email: str
    created_at: datetime
