from pydantic import BaseModel, Field
from typing import List
from enum import Enum

class RecordType(str, Enum):
    A = "A"
    AAAA = "AAAA"
    CAA = "CAA"
    CNAME = "CNAME"
    MX = "MX"
    NS = "NS"
    SRV = "SRV"
    TXT = "TXT"

class Record(BaseModel):
    name: str = Field("@", description="Name relative to the zone, '@' or empty for the apex")
    type: RecordType = Field(..., description="Record type")
    value: str = Field(..., description="Record value as authored or as fetched from the API")
    ttl: int = Field(300, ge=0, description="Time to live in seconds")

class RecordSet(BaseModel):
    name: str = Field(..., description="Fully qualified name with trailing dot")
    type: RecordType = Field(..., description="Record type shared by every record in the set")
    ttl: int = Field(..., ge=0, description="Time to live in seconds")
    records: List[str] = Field(default_factory=list, description="Presentation format record contents")
