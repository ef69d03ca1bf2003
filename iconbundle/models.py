"""Core data models shared across iconbundle components."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

VECTOR_EXTENSION = ".svg"
IMAGE_EXTENSIONS = ("svg", "jpg", "jpeg", "png", "gif")


@dataclass
class SourceFile:
    """An icon source discovered on one of the node levels."""

    fullname: str
    filename: str
    ext: str
    name: str
    data: Optional[bytes] = field(default=None, repr=False, compare=False)

    @property
    def is_vector(self) -> bool:
        return self.ext.lower() == VECTOR_EXTENSION

    def info(self) -> Dict[str, str]:
        """Describe the file without its contents."""
        return {
            "fullname": self.fullname,
            "filename": self.filename,
            "ext": self.ext,
            "name": self.name,
        }


@dataclass
class IconPair:
    """Vector and bitmap variants that share one base name."""

    name: str
    vector: Optional[SourceFile] = None
    bitmap: Optional[SourceFile] = None


@dataclass
class IconLists:
    """Per-slot source lists fed to the encoders."""

    v: List[SourceFile] = field(default_factory=list)
    b: List[SourceFile] = field(default_factory=list)
