"""Schema for confirmation dialogs returned by page actions."""
from pydantic import BaseModel, Field


class Confirmation(BaseModel):
    """A confirmation dialog the UI renders before a destructive action."""
    title: str
    text: str
    next_url: str = Field(..., description="URL the confirm button submits to")
    cancel: int = Field(1, description="1 to show a cancel button")
    form_name: str
