from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ServerRecord(BaseModel):
    """One server entry from the fleet status feed."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    location: str = ""
    mode: str = ""
    name: str = ""
    type: str = ""
    vms: str = ""

    @field_validator("location", "mode", "name", "type", "vms", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        # The feed sends null for unset fields; treat it like a missing key.
        return "" if value is None else value
