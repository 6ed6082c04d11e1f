from pydantic import BaseModel, ConfigDict


class LanguageSummary(BaseModel):
    """Minimal language descriptor used in place of a populated reference."""
    public_id: str
    name: str
    model_config = ConfigDict(from_attributes=True)


class LanguageRef(BaseModel):
    id: str
    folder: str
