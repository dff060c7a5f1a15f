"""
Outreach message generation schemas.
"""
from pydantic import AliasChoices, BaseModel, Field, field_validator


class MessageRequest(BaseModel):
    """Person/company description to write an outreach message for."""
    name: str
    job_title: str
    company_name: str = Field(validation_alias=AliasChoices("company_name", "company"))
    location: str
    summary: str

    @field_validator("name", "job_title", "company_name", "location", "summary")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} is required")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "John Doe",
                "job_title": "Software Engineer",
                "company_name": "TechCorp",
                "location": "San Francisco, CA",
                "summary": "Experienced in AI & ML."
            }
        }


class MessageResponse(BaseModel):
    """Generated outreach text."""
    response: str
