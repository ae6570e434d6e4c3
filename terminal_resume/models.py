"""
Terminal Resume Models

Pydantic models for content records, terminal output and
request/response validation.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Content models

class DirectoryEntry(BaseModel):
    """A top-level content directory."""
    name: str = Field(..., description="Directory name, e.g. 'Experience'")
    path: str = Field(..., description="Path of the directory inside the content repository")


class ContentItem(BaseModel):
    """One markdown file in a directory listing."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Filename, e.g. 'devops-engineer.md'")
    title: str = Field(..., description="Display title")
    order: int = Field(999, description="Explicit ordering hint, lower first")
    metadata: Dict[str, str] = Field(default_factory=dict, description="Frontmatter fields")
    download_url: Optional[str] = Field(None, alias="downloadUrl", description="Raw file URL")


class FileContent(BaseModel):
    """A single content file with its frontmatter stripped."""
    title: str = Field(..., description="Display title")
    content: str = Field(..., description="Markdown body")
    metadata: Dict[str, str] = Field(default_factory=dict, description="Frontmatter fields")
    filename: str = Field(..., description="Filename the body was read from")


class FrontMatter(BaseModel):
    """Result of splitting a document into header fields and body."""
    title: str
    order: int = 999
    metadata: Dict[str, str] = Field(default_factory=dict)
    body: str = ""


class DirectoriesResponse(BaseModel):
    directories: List[DirectoryEntry]


class FilesResponse(BaseModel):
    files: List[ContentItem]


# Terminal models

class LineKind(str, Enum):
    """Rendering style of a scrollback line."""
    NORMAL = "normal"
    ERROR = "error"
    PROCESSING = "processing"
    SEPARATOR = "separator"
    USER_INPUT = "user-input"
    MARKDOWN = "markdown"
    ASCII_ART = "ascii-art"
    TAGLINE = "tagline"
    AI_RESPONSE = "ai-response"
    MENU_HEADER = "menu-header"


class TerminalLine(BaseModel):
    """Single line of terminal scrollback."""
    text: str = Field("", description="Line text (may hold a multi-line markdown block)")
    kind: LineKind = Field(LineKind.NORMAL, description="Rendering style")
    is_markdown: bool = Field(False, description="Render text as markdown")
    clickable_command: Optional[str] = Field(None, description="Command submitted when the line is clicked")


class Effect(BaseModel):
    """Side effect the transport should perform after a command."""
    kind: str = Field(..., description="'open_url', 'audio' or 'close'")
    value: Optional[str] = Field(None, description="URL or data URI")


# Assistant models

class ChatRequest(BaseModel):
    """Question for the assistant."""
    message: Optional[str] = Field(None, description="Free-text question")


class ChatResponse(BaseModel):
    """Assistant reply."""
    response: str = Field(..., description="Assistant reply text")


# Speech models

class SpeechRequest(BaseModel):
    """Request to synthesize speech from text."""
    text: Optional[str] = Field(None, description="Text to convert to speech")


class SpeechResponse(BaseModel):
    """Synthesized audio."""
    model_config = ConfigDict(populate_by_name=True)

    audio_url: str = Field(..., alias="audioUrl", description="data:audio/mpeg;base64 URI")


# Error response model

class ErrorResponse(BaseModel):
    """Error response."""
    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(None, description="Additional error details")
