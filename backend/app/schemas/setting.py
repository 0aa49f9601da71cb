"""
Settings schemas.
"""

from pydantic import BaseModel
from typing import Dict


class SettingsUpdateResponse(BaseModel):
    """Settings after an upsert."""
    success: bool = True
    settings: Dict[str, str]
