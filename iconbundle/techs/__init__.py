"""Build techs available to iconbundle nodes."""

from typing import Dict, Type

from .base import BaseTech
from .base64_icons import Base64IconsTech

TECHS: Dict[str, Type[BaseTech]] = {
    "base64-icons": Base64IconsTech,
}

__all__ = ["BaseTech", "Base64IconsTech", "TECHS"]
