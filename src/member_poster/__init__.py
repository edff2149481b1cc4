"""Personalized member posters: footer compositing, member register and email dispatch."""

from .config import MailSettings, PosterConfig
from .errors import (
    CompositeError,
    GeometryError,
    InputDecodeError,
    PosterError,
    WriteError,
)
from .models import Member, MemberProfile, PosterJob
from .poster_pipeline import create_poster, encode_poster, render_poster

__all__ = [
    "PosterConfig",
    "MailSettings",
    "PosterError",
    "InputDecodeError",
    "GeometryError",
    "CompositeError",
    "WriteError",
    "Member",
    "MemberProfile",
    "PosterJob",
    "render_poster",
    "encode_poster",
    "create_poster",
]
