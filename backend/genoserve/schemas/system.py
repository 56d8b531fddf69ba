"""Health check schema."""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Health check response — consumed by the front end and monitoring."""
    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    data_dir: str = Field(alias="dataDir")
    version: str
