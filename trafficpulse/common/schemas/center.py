from pydantic import BaseModel, ConfigDict, Field

class Coordinate(BaseModel):
    """
    A point supplied by a caller (map click or external submission).
    No range validation: out-of-range values simply match nothing.
    """
    model_config = ConfigDict(strict=True)

    lat: float = Field(..., allow_inf_nan=False, description="Latitude in degrees")
    lng: float = Field(..., allow_inf_nan=False, description="Longitude in degrees")

class LookupCoordinates(BaseModel):
    latitude: float
    longitude: float

class LookupLocation(BaseModel):
    zone: str
    district: int
    coordinates: LookupCoordinates

class LookupViolations(BaseModel):
    total: int
    reported: int

class LookupChallanBreakdown(BaseModel):
    collected_amount: float

class LookupChallans(BaseModel):
    """
    The collected amount is nested under "breakdown" at this boundary;
    existing map clients read it from there.
    """
    total: int
    breakdown: LookupChallanBreakdown

class LookupAccidents(BaseModel):
    today: int
    overall: int

class CenterLookupResponse(BaseModel):
    """
    Response view of a resolved center. The challan type breakdown is omitted.
    """
    model_config = ConfigDict(populate_by_name=True)

    center_id: str = Field(..., alias="centerId")
    location: LookupLocation
    violations: LookupViolations
    challans: LookupChallans
    accidents: LookupAccidents
