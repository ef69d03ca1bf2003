"""CSS rule encoders for icon sources."""

from __future__ import annotations

import base64
import dataclasses
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .errors import DataURISizeError, IconReadError, UnknownTypeError
from .models import SourceFile

DEFAULT_SELECTOR_PREFIX = "."
DEFAULT_FALLBACK_PREFIX = ".i-ua_svg_no"
DEFAULT_MAX_DATA_URI_SIZE = 32000

OUTPUT_TYPES = ("v", "b", "ie", "ie6", "combo")

TEMPLATES_DIR = Path(__file__).with_name("templates")

# Applied in order; "%" must be escaped before the sequences that introduce it.
_SVG_ESCAPES = (
    ('"', "'"),
    ("%", "%25"),
    ("<", "%3C"),
    (">", "%3E"),
    ("&", "%26"),
    ("#", "%23"),
)
_WHITESPACE = re.compile(r"\s+")


def create_environment(templates_dir: Path | None = None) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
    )


def mime_subtype(ext: str) -> str:
    subtype = ext.lstrip(".").lower()
    return "svg+xml" if subtype == "svg" else subtype


def encode_svg_text(text: str) -> str:
    for needle, replacement in _SVG_ESCAPES:
        text = text.replace(needle, replacement)
    return _WHITESPACE.sub(" ", text)


@dataclass(frozen=True)
class RuleEncoder:
    """Renders one CSS rule per icon source."""

    sources_suffix: str
    selector_prefix: str = DEFAULT_SELECTOR_PREFIX
    fallback_prefix: str = DEFAULT_FALLBACK_PREFIX
    max_data_uri_size: int = DEFAULT_MAX_DATA_URI_SIZE
    svg_to_base64: bool = False
    env: Environment = field(default_factory=create_environment, compare=False, repr=False)

    def with_fallback_prefix(self) -> "RuleEncoder":
        """Return an encoder whose selectors sit under the no-SVG fallback class."""
        return dataclasses.replace(
            self, selector_prefix=f"{self.fallback_prefix} {self.selector_prefix}"
        )

    def selector(self, source: SourceFile) -> str:
        name = source.name
        if source.ext and name.endswith(source.ext):
            name = name[: -len(source.ext)]
        suffix = f".{self.sources_suffix}"
        if name.endswith(suffix):
            name = name[: -len(suffix)]
        return f"{self.selector_prefix}{name}"

    def to_base64(self, source: SourceFile) -> str:
        payload = base64.b64encode(_contents(source)).decode("ascii")
        content = f"data:image/{mime_subtype(source.ext)};base64,{payload}"
        limit = self.max_data_uri_size or DEFAULT_MAX_DATA_URI_SIZE
        if len(content) > limit:
            raise DataURISizeError(
                f'Max DataURI length was exceeded on file "{source.filename}"'
            )
        return self._background(source, content)

    def to_encoded_svg(self, source: SourceFile) -> str:
        if not source.is_vector:
            return self.to_base64(source)
        text = encode_svg_text(_contents(source).decode("utf-8", errors="replace"))
        return self._background(source, f'"data:image/svg+xml;charset=utf8,{text}"')

    def to_svg(self, source: SourceFile) -> str:
        if self.svg_to_base64:
            return self.to_base64(source)
        return self.to_encoded_svg(source)

    def to_link(self, source: SourceFile) -> str:
        return self._background(source, source.filename)

    def to_filter(self, source: SourceFile) -> str:
        template = self.env.get_template("alpha_filter.css.j2")
        return template.render(filename=source.filename, selector=self.selector(source))

    def encoder_for(self, output_type: str) -> Callable[[SourceFile], str]:
        """Return the single-file encoder for a non-combo output type."""
        encoders: Dict[str, Callable[[SourceFile], str]] = {
            "v": self.to_svg,
            "b": self.to_base64,
            "ie": self.to_link,
            "ie6": self.to_filter,
        }
        try:
            return encoders[output_type]
        except KeyError:
            raise UnknownTypeError(f'Unknown target type "{output_type}"') from None

    def _background(self, source: SourceFile, url: str) -> str:
        template = self.env.get_template("background_image.css.j2")
        return template.render(filename=source.filename, selector=self.selector(source), url=url)


def _contents(source: SourceFile) -> bytes:
    if source.data is None:
        raise IconReadError(f'Contents of "{source.filename}" have not been read')
    return source.data


__all__ = [
    "DEFAULT_FALLBACK_PREFIX",
    "DEFAULT_MAX_DATA_URI_SIZE",
    "DEFAULT_SELECTOR_PREFIX",
    "OUTPUT_TYPES",
    "RuleEncoder",
    "create_environment",
    "encode_svg_text",
    "mime_subtype",
]
