"""Shared fixtures: small synthetic template, logo and photo images."""

from pathlib import Path

import pytest
from PIL import Image

from member_poster.models import Member, MemberProfile, PosterJob


def save_image(path: Path, size: tuple[int, int], color, mode: str = "RGB") -> Path:
    Image.new(mode, size, color).save(path)
    return path


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    return save_image(tmp_path / "template.png", (1200, 900), (200, 30, 30))


@pytest.fixture
def logo_path(tmp_path: Path) -> Path:
    return save_image(tmp_path / "logo.png", (300, 150), (0, 128, 0, 255), mode="RGBA")


@pytest.fixture
def photo_path(tmp_path: Path) -> Path:
    return save_image(tmp_path / "photo.png", (400, 300), (10, 60, 200))


@pytest.fixture
def profile(photo_path: Path) -> MemberProfile:
    return MemberProfile(
        name="Asha Rao",
        designation="Wealth Manager",
        phone="9999999999",
        photo=photo_path,
    )


@pytest.fixture
def job(template_path: Path, logo_path: Path, profile: MemberProfile, tmp_path: Path) -> PosterJob:
    return PosterJob(
        template_source=template_path,
        member=profile,
        logo_source=logo_path,
        output_target=tmp_path / "out" / "poster.jpg",
    )


@pytest.fixture
def member(photo_path: Path) -> Member:
    return Member(
        name="Asha Rao",
        email="asha@example.com",
        phone="9999999999",
        designation="Wealth Manager",
        photo=str(photo_path),
    )
