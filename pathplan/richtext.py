"""
Step content: structured rich text

Styled spans carry the visible text, images travel as separate attachments
anchored at a character offset of the plain text.
"""

import base64
import binascii
import re
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pathplan.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FONT_SIZE = 17.0
ATTACHMENT_PLACEHOLDER = "\ufffc"

_IMAGE_MARKER = re.compile(r"\n?\[IMAGE:([^\]]+)\]")
_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class TextStyle(BaseModel):
    """Formatting applied to one span"""

    model_config = ConfigDict(frozen=True)

    bold: bool = Field(default=False, description="Bold font weight")
    font_size: float = Field(default=DEFAULT_FONT_SIZE, gt=0, description="Point size")
    color: Optional[str] = Field(default=None, description="Foreground color as #RRGGBB")
    underline: bool = False
    strikethrough: bool = False

    @field_validator("color", mode="before")
    @classmethod
    def normalize_color(cls, v):
        """'abc' / '#a1b2c3' -> '#AABBCC' / '#A1B2C3'"""
        if v is None or v == "":
            return None
        match = _HEX_COLOR.match(str(v).strip())
        if not match:
            raise ValueError(f"not a hex color: {v!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return "#" + digits.upper()


class StyledSpan(BaseModel):
    text: str
    style: TextStyle = Field(default_factory=TextStyle)


class Attachment(BaseModel):
    """Inline image, bytes base64-encoded in JSON"""

    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    data: bytes
    position: int = Field(default=0, ge=0, description="Offset into the plain text")


class RichText(BaseModel):
    """Formatted text plus image attachments"""

    spans: List[StyledSpan] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)

    @classmethod
    def plain(cls, text: str, style: Optional[TextStyle] = None) -> "RichText":
        if not text:
            return cls()
        return cls(spans=[StyledSpan(text=text, style=style or TextStyle())])

    @property
    def plain_text(self) -> str:
        return "".join(span.text for span in self.spans)

    @property
    def is_blank(self) -> bool:
        """No visible text and no images"""
        return not self.plain_text.strip() and not self.attachments

    def runs(self) -> List[StyledSpan]:
        """Adjacent spans with equal style merged, empty spans dropped"""
        merged: List[StyledSpan] = []
        for span in self.spans:
            if not span.text:
                continue
            if merged and merged[-1].style == span.style:
                merged[-1] = StyledSpan(text=merged[-1].text + span.text, style=span.style)
            else:
                merged.append(StyledSpan(text=span.text, style=span.style))
        return merged

    def _with_inserts(self, insert) -> str:
        text = self.plain_text
        pieces = []
        cursor = 0
        for attachment in sorted(self.attachments, key=lambda a: a.position):
            at = min(attachment.position, len(text))
            pieces.append(text[cursor:at])
            pieces.append(insert(attachment))
            cursor = at
        pieces.append(text[cursor:])
        return "".join(pieces)

    def render(self, placeholder: str = ATTACHMENT_PLACEHOLDER) -> str:
        """Plain text with one placeholder character per attachment"""
        return self._with_inserts(lambda attachment: placeholder)

    def to_marked_text(self) -> str:
        """Legacy single-string form: images as '\\n[IMAGE:<base64>]' markers, styling dropped"""
        return self._with_inserts(
            lambda attachment: "\n[IMAGE:" + base64.b64encode(attachment.data).decode("ascii") + "]"
        )

    @classmethod
    def from_marked_text(cls, raw: str, style: Optional[TextStyle] = None) -> "RichText":
        """Parse the legacy marker form; undecodable markers stay as literal text"""
        text_parts: List[str] = []
        attachments: List[Attachment] = []
        length = 0
        cursor = 0
        for match in _IMAGE_MARKER.finditer(raw):
            try:
                data = base64.b64decode(match.group(1), validate=True)
            except (binascii.Error, ValueError):
                logger.warning("Ignoring undecodable image marker at offset %d", match.start())
                continue
            before = raw[cursor:match.start()]
            text_parts.append(before)
            length += len(before)
            attachments.append(Attachment(data=data, position=length))
            cursor = match.end()
        text_parts.append(raw[cursor:])

        rich = cls.plain("".join(text_parts), style)
        rich.attachments = attachments
        return rich


def encode(content: RichText) -> str:
    return content.model_dump_json()


def decode(raw: Optional[str]) -> RichText:
    """Stored JSON -> RichText; malformed input yields empty content"""
    if not raw:
        return RichText()
    try:
        return RichText.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("Could not decode step content, treating as empty: %s", exc.errors()[0]["msg"])
        return RichText()


def coerce(content) -> RichText:
    """Accept RichText or a plain string"""
    if content is None:
        return RichText()
    if isinstance(content, RichText):
        return content
    if isinstance(content, str):
        return RichText.plain(content)
    raise TypeError(f"unsupported content type: {type(content).__name__}")
