from pydantic import BaseModel

from campus_portal.schemas.user import UserOut


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserOut
