"""Batch poster rendering and sending across members with bounded concurrency."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from .config import PosterConfig
from .constants import DEFAULT_MAX_WORKERS
from .errors import MailError, PosterError
from .models import ImageSource, Member, PosterJob, slugify
from .output import output_path_for_format
from .poster_pipeline import create_poster

logger = logging.getLogger(__name__)


class PosterSender(Protocol):
    def send(self, member: Member, poster_path: str | Path) -> None: ...


@dataclass(frozen=True)
class JobResult:
    """Outcome of one poster job: an output path or the error that stopped it."""

    job: PosterJob
    output_path: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SendResult:
    """Outcome of rendering and emailing one member's poster."""

    member: Member
    output_path: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.ok:
            return f"Poster sent to {self.member.name} <{self.member.email}>"
        return f"Failed to send poster to member {self.member.name}: {self.error}"


def _run_job(job: PosterJob, config: PosterConfig) -> JobResult:
    try:
        return JobResult(job=job, output_path=create_poster(job, config))
    except PosterError as e:
        logger.warning("Poster for %s failed: %s", job.member.name, e)
        return JobResult(job=job, error=e)


def render_batch(
    jobs: Sequence[PosterJob],
    config: PosterConfig | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[JobResult]:
    """
    Run independent poster jobs on a bounded thread pool.

    Results are returned in input order. A failed job is reported in its
    result and never stops the others.
    """
    config = config or PosterConfig()
    if not jobs:
        return []
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        return list(executor.map(lambda job: _run_job(job, config), jobs))


def select_members(members: Iterable[Member], designation: str | None = None) -> list[Member]:
    """Members holding the designation; all members when designation is empty."""
    if not designation:
        return list(members)
    return [m for m in members if m.has_designation(designation)]


def poster_path_for(member: Member, output_dir: Path, output_format: str) -> Path:
    base_name = f"{slugify(member.name)}-{slugify(member.email, 'email')}-poster"
    return output_dir / output_path_for_format(output_format, base_name)


def send_posters(
    members: Iterable[Member],
    template: ImageSource,
    logo: ImageSource,
    output_dir: str | Path,
    mailer: PosterSender,
    config: PosterConfig | None = None,
    designation: str | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[SendResult]:
    """
    Render one poster per selected member and email it.

    Each member is handled independently; failures are returned as results
    rather than raised. No step is retried.
    """
    config = config or PosterConfig()
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    selected = select_members(members, designation)

    def deliver(member: Member) -> SendResult:
        job = PosterJob(
            template_source=template,
            member=member.to_profile(),
            logo_source=logo,
            output_target=poster_path_for(member, out_dir, config.output_format),
        )
        try:
            path = create_poster(job, config)
            mailer.send(member, path)
        except (PosterError, MailError) as e:
            result = SendResult(member=member, error=e)
            logger.warning(result.message)
            return result
        return SendResult(member=member, output_path=path)

    if not selected:
        return []
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        return list(executor.map(deliver, selected))
