"""Language register API routes."""

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from triglot.core.translation.languages import list_registers

router = APIRouter()


class LanguageInfo(BaseModel):
    """A register exposed to the frontend."""

    code: str
    label: str
    name: str


@router.get("/languages", response_model=List[LanguageInfo])
async def get_languages() -> List[LanguageInfo]:
    """List the registers the service translates between."""
    return [
        LanguageInfo(code=info.register.value, label=info.label, name=info.name)
        for info in list_registers()
    ]
