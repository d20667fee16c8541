# backend/bizsuite/api/rendering.py
import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from fastapi import HTTPException, Response, status

from bizsuite.services.pdf_service import GeneratedDocument

logger = logging.getLogger(__name__)


async def run_in_thread(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    # WeasyPrint is CPU bound and synchronous; keep it off the event loop
    loop = asyncio.get_event_loop()
    with ThreadPoolExecutor() as pool:
        return await loop.run_in_executor(pool, functools.partial(func, *args, **kwargs))


def pdf_response(document: GeneratedDocument) -> Response:
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": document.content_disposition},
    )


async def render_pdf_response(
    generate: Callable[..., GeneratedDocument],
    record: Any,
    *,
    label: str,
    download: bool = True,
    template_id: Optional[str] = None,
) -> Response:
    """
    Run one of the PDFService.generate_* operations in a worker thread and wrap
    the result in a PDF response. Rendering failures become a 500.
    """
    try:
        document = await run_in_thread(generate, record, download, template_id)
    except Exception as e:
        logger.exception(f"Error generating PDF for {label}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error generating PDF for {label}.",
        )
    return pdf_response(document)
