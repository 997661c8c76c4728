import os
import re
from datetime import datetime, timezone
from typing import Optional

from fastapi import UploadFile

TRUTHY = {"1", "true", "yes", "on"}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_truthy(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    return raw.strip().lower() in TRUTHY


def clean_filename(name: str) -> str:
    name = os.path.basename(name or "")
    name = re.sub(r"[^\w\-_.]", "_", name)
    return name


def slugify(s: str) -> str:
    s = (s or "").strip().lower()
    s = re.sub(r"['\"]", "", s)
    s = re.sub(r"[^a-z0-9]+", "-", s)
    return re.sub(r"-+", "-", s).strip("-")


def trim_strings(fields: dict) -> dict:
    return {k: (v.strip() if isinstance(v, str) else v) for k, v in fields.items()}


def normalize_mime(raw: Optional[str]) -> str:
    mime = (raw or "").split(";", 1)[0].strip().lower()
    if mime == "image/jpg":
        return "image/jpeg"
    return mime


async def read_limited(upload: UploadFile, limit: int) -> bytes:
    """Read at most ``limit + 1`` bytes so oversize uploads are detectable without buffering them whole."""
    try:
        return await upload.read(limit + 1)
    finally:
        await upload.close()
