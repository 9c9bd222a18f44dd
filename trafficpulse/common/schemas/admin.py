from pydantic import BaseModel, ConfigDict, Field

class AdminCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    center_id: str = Field(..., alias="centerID", min_length=1)
    password: str = Field(..., min_length=6)
    lat: float = Field(..., allow_inf_nan=False)
    lng: float = Field(..., allow_inf_nan=False)
    center_name: str = Field(..., alias="centerName", min_length=1)

class AdminLogin(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    center_id: str = Field(..., alias="centerID", min_length=1)
    password: str = Field(..., min_length=1)

class AdminPublic(BaseModel):
    """
    Center admin as exposed to clients (never includes the password hash).
    Also used as the map marker for the center.
    """
    model_config = ConfigDict(populate_by_name=True)

    center_id: str = Field(..., alias="centerID")
    center_name: str = Field(..., alias="centerName")
    lat: float
    lng: float

class AdminToken(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str
    token_type: str = "bearer"
    center_id: str = Field(..., alias="centerID")
