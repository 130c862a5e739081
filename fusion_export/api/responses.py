"""Download responses."""

import re
from urllib.parse import quote

from fastapi import Response

from fusion_export.models.package import DeliveryUnit

_UNSAFE_FALLBACK = re.compile(r'[^\x20-\x7e]|["\\]')


def content_disposition(filename: str) -> str:
    """``Content-Disposition`` value for an attachment.

    Non-ASCII names get an ASCII ``filename`` fallback plus an RFC 5987
    ``filename*`` parameter carrying the UTF-8 name.
    """
    fallback = _UNSAFE_FALLBACK.sub("_", filename)
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def attachment(unit: DeliveryUnit) -> Response:
    return Response(
        content=unit.content,
        media_type=unit.media_type,
        headers={"Content-Disposition": content_disposition(unit.filename)},
    )
