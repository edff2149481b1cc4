"""Shared poster orchestration used by CLI and web app entry points."""

import logging
from pathlib import Path

from PIL import Image

from .compositor import (
    circular_photo,
    compose_footer,
    normalize_logo,
    plan_geometry,
    render_text_layer,
    resize_template,
    stack_poster,
)
from .config import PosterConfig
from .models import PosterJob
from .output import provider_for_format
from .output.base import OutputProvider

logger = logging.getLogger(__name__)


def render_poster(job: PosterJob, config: PosterConfig | None = None) -> Image.Image:
    """
    Run planner, layer renderers and compositor for one job.

    Stages run strictly in order; any failure aborts the job before output
    is encoded.
    """
    config = config or PosterConfig()
    template = resize_template(job.template_source, config.canonical_width)
    plan = plan_geometry(template.width, config)

    photo = circular_photo(job.member.photo, plan.photo_diameter)
    text = render_text_layer(job.member, plan, config)
    logo = normalize_logo(job.logo_source, plan.logo_side, config.footer_background)

    footer = compose_footer(photo, text, logo, plan, config)
    return stack_poster(template, footer, config.canvas_background)


def encode_poster(
    job: PosterJob,
    config: PosterConfig | None = None,
    provider: OutputProvider | None = None,
) -> bytes:
    """Render the poster and encode it fully in memory."""
    config = config or PosterConfig()
    target_provider = provider or provider_for_format(
        config.output_format, job.output_target, quality=config.quality
    )
    return target_provider.encode(render_poster(job, config))


def create_poster(job: PosterJob, config: PosterConfig | None = None) -> Path:
    """
    Render, encode and write the poster for one job.

    Nothing is written unless every stage succeeds, and the write itself is
    all-or-nothing.

    Returns:
        Path of the written poster
    """
    config = config or PosterConfig()
    provider = provider_for_format(config.output_format, job.output_target, quality=config.quality)
    encoded = encode_poster(job, config, provider)
    written = provider.write(encoded)
    logger.info("Poster for %s written to %s", job.member.name, written)
    return written
