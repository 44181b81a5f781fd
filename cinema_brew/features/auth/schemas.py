# cinema_brew/features/auth/schemas.py
from pydantic import BaseModel, Field, field_validator

# bcrypt only looks at the first 72 bytes; bcrypt>=5 refuses anything longer
MAX_PASSWORD_BYTES = 72

class Credentials(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v

class UserOut(BaseModel):
    id: int
    username: str
