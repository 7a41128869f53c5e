# marketplace/schemas/user_schema.py
from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from marketplace.models.user import UserRoleEnum

# Token 回應的格式 (OAuth2 表單登入)
class Token(BaseModel):
    access_token: str
    token_type: str

# Token 內的資料
class TokenData(BaseModel):
    user_id: str
    role: str


# 註冊請求 Body
# (前端 React 表單送的是 Name / Email / Password / Role，兩種寫法都接受)
class UserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Name", max_length=100)
    email: EmailStr = Field(..., alias="Email")
    password: str = Field(..., alias="Password", min_length=6)
    role: UserRoleEnum = Field(UserRoleEnum.user, alias="Role")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """姓名去除前後空白後至少 2 個字元"""
        v = v.strip()
        if len(v) < 2:
            raise ValueError('Name must be at least 2 characters')
        return v

# JSON 登入請求 Body
class UserLogin(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr = Field(..., alias="Email")
    password: str = Field(..., alias="Password")

# 註冊/查詢使用者的安全回應 (不含密碼)
class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: str
    email: EmailStr
    role: UserRoleEnum
    is_active: bool

# 嵌在 Profile 內的精簡使用者資訊
class UserSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: str
    email: str
    role: UserRoleEnum

class RegisterResponse(BaseModel):
    message: str
    user: UserOut

class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserOut
