"""FastAPI web app for the member register and poster delivery."""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.requests import Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from member_poster.batch import send_posters
from member_poster.compositor import load_image
from member_poster.config import MailSettings, PosterConfig
from member_poster.constants import DEFAULT_MAX_WORKERS
from member_poster.errors import (
    DuplicateMemberError,
    GeometryError,
    InputDecodeError,
    MailError,
    MemberNotFoundError,
    PosterError,
    StoreError,
)
from member_poster.mailer import Mailer
from member_poster.models import Member, PosterJob, slugify
from member_poster.output import media_type_for_output_format, output_path_for_format
from member_poster.poster_pipeline import encode_poster
from member_poster.store import MemberStore

load_dotenv()

app = FastAPI(title="Member Posters")

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")


class MemberIn(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)
    photo: str = ""

    def to_member(self) -> Member:
        return Member(**self.model_dump())


def get_store() -> MemberStore:
    return MemberStore(os.getenv("MEMBER_STORE_PATH", "output/members.xlsx"))


def get_assets() -> tuple[Path | None, Path | None]:
    """Configured template and logo; either may be missing."""
    template = os.getenv("TEMPLATE_PATH")
    logo = os.getenv("LOGO_PATH")
    return (Path(template) if template else None, Path(logo) if logo else None)


def get_upload_dir() -> Path:
    return Path(os.getenv("PHOTO_UPLOAD_DIR", "output/photos"))


def get_poster_dir() -> Path:
    return Path(os.getenv("POSTER_OUTPUT_DIR", "output/posters"))


def get_mailer() -> Mailer:
    try:
        return Mailer(MailSettings.from_env())
    except MailError as e:
        raise HTTPException(status_code=500, detail=str(e))


def _member_dict(member: Member) -> dict[str, str]:
    return {
        "name": member.name,
        "email": member.email,
        "phone": member.phone,
        "designation": member.designation,
        "photo": member.photo,
    }


PHOTO_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp"}


def _require_asset(path: Path | None, env_name: str) -> Path:
    if path is None:
        raise HTTPException(status_code=500, detail=f"{env_name} must be configured")
    return path


def _photo_path(upload_dir: Path, name: str, email: str, designation: str, filename: str | None) -> Path:
    suffix = Path(filename or "").suffix.lower()
    if suffix not in PHOTO_SUFFIXES:
        suffix = ".jpg"
    stem = "-".join(
        [slugify(name), slugify(email, "email"), slugify(designation, "designation")]
    )
    return upload_dir / f"{stem}{suffix}"


async def _read_image_upload(upload: UploadFile, role: str) -> bytes:
    """Read an uploaded image and make sure Pillow can decode it."""
    data = await upload.read()
    try:
        load_image(data, role)
    except InputDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return data


@app.get("/", response_class=HTMLResponse)
async def index(request: Request, store: MemberStore = Depends(get_store)):
    """Serve the member overview page."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"members": store.list_members(), "stats": store.stats()},
    )


@app.get("/api/ping")
async def ping():
    return {"status": "ok"}


@app.get("/api/users")
def list_users(
    q: str = Query("", description="Search name, email, phone or designation"),
    store: MemberStore = Depends(get_store),
):
    try:
        return [_member_dict(m) for m in store.search(q)]
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/stats")
def stats(store: MemberStore = Depends(get_store)):
    try:
        return store.stats()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/users", status_code=201)
async def create_user(
    name: str = Form(..., min_length=1),
    email: str = Form(..., min_length=3),
    phone: str = Form(..., min_length=1),
    designation: str = Form(..., min_length=1),
    photo: UploadFile = File(..., description="Member photo"),
    store: MemberStore = Depends(get_store),
    upload_dir: Path = Depends(get_upload_dir),
):
    """Register a member from a multipart form, saving the uploaded photo."""
    data = await _read_image_upload(photo, "photo")
    photo_path = _photo_path(upload_dir, name, email, designation, photo.filename)
    member = Member(
        name=name, email=email, phone=phone, designation=designation, photo=str(photo_path)
    )
    try:
        member = store.add(member)
    except DuplicateMemberError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    # Written only after the row is accepted so a duplicate never replaces a photo
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        photo_path.write_bytes(data)
    except OSError as e:
        store.delete(member.email, member.designation)
        raise HTTPException(status_code=500, detail=f"Cannot save photo to {photo_path}: {e}")
    return _member_dict(member)


@app.put("/api/users/{email}/{designation}")
def update_user(
    email: str,
    designation: str,
    payload: MemberIn,
    store: MemberStore = Depends(get_store),
):
    try:
        return _member_dict(store.update(email, designation, payload.to_member()))
    except MemberNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateMemberError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.delete("/api/users/{email}/{designation}", status_code=204)
def delete_user(email: str, designation: str, store: MemberStore = Depends(get_store)):
    try:
        store.delete(email, designation)
    except MemberNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=204)


@app.get("/api/poster/{email}/{designation}")
def poster(
    email: str,
    designation: str,
    output_format: str = Query("jpeg", alias="format", description="Output format: jpeg or webp"),
    store: MemberStore = Depends(get_store),
    assets: tuple[Path | None, Path | None] = Depends(get_assets),
):
    """Render and return the poster for one registered member."""
    template = _require_asset(assets[0], "TEMPLATE_PATH")
    logo = _require_asset(assets[1], "LOGO_PATH")
    try:
        member = store.get(email, designation)
        media_type = media_type_for_output_format(output_format)
        job = PosterJob(
            template_source=template,
            member=member.to_profile(),
            logo_source=logo,
            output_target=Path(output_path_for_format(output_format)),
        )
        encoded = encode_poster(job, PosterConfig(output_format=output_format.lower()))
        return Response(
            content=encoded,
            media_type=media_type,
            headers={"Content-Disposition": f"inline; filename={job.output_target.name}"},
        )
    except MemberNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (ValueError, InputDecodeError, GeometryError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (PosterError, StoreError) as e:
        raise HTTPException(status_code=500, detail=f"Failed to generate poster: {e}")


@app.post("/api/send-posters")
async def send(
    designation: str | None = Form(None),
    max_workers: int = Form(DEFAULT_MAX_WORKERS, ge=1, le=16),
    template: UploadFile | None = File(None, description="Template used instead of TEMPLATE_PATH"),
    store: MemberStore = Depends(get_store),
    assets: tuple[Path | None, Path | None] = Depends(get_assets),
    poster_dir: Path = Depends(get_poster_dir),
    mailer: Mailer = Depends(get_mailer),
):
    """Email a poster to every member holding the requested designation."""
    logo = _require_asset(assets[1], "LOGO_PATH")
    if template is not None and template.filename:
        template_source = await _read_image_upload(template, "template")
    else:
        template_source = _require_asset(assets[0], "TEMPLATE_PATH")
    try:
        members = store.list_members()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    results = await run_in_threadpool(
        send_posters,
        members,
        template_source,
        logo,
        poster_dir,
        mailer,
        designation=designation,
        max_workers=max_workers,
    )
    return {
        "sent": sum(1 for r in results if r.ok),
        "failed": sum(1 for r in results if not r.ok),
        "results": [
            {"email": r.member.email, "ok": r.ok, "message": r.message} for r in results
        ],
    }
