"""
HTTP endpoints for uploading, searching and serving PDFs.

Read endpoints are cached per cache version. Every mutation bumps the
version before its response is sent.
"""

import time
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import FileResponse
from starlette.concurrency import run_in_threadpool

from ..core import audit, get_config, get_logger
from ..search import QueryPlanner
from .caching import cached_call, cached_response
from .dependencies import Services, get_current_user, get_services

logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"

router = APIRouter()


@router.get("/")
def service_status():
    """Service liveness."""
    return {"ok": True, "service": get_config().api.title}


@router.post("/pdfs")
async def upload_pdf(
    pdf: UploadFile = File(...),
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Ingest one uploaded PDF."""
    data = await pdf.read()
    result = await run_in_threadpool(
        services.ingestion.ingest, data, pdf.filename or "", user_id
    )

    audit.log_upload(user_id, result.document.original_name, list(result.document.tags), len(data))

    body = {"message": "PDF indexed", "success": True}
    body.update(result.to_dict())
    return body


@router.get("/pdfs/search")
def search_pdfs(
    q: str = Query(default=""),
    page: Optional[str] = Query(default="1"),
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Search documents; cached per query, page and cache version."""
    start_time = time.time()
    text = q.strip()
    page_number = QueryPlanner.clamp_page(page)

    body, status = cached_call(
        services.cache,
        "/pdfs/search",
        {"q": text, "page": page_number},
        get_config().cache.search_ttl_seconds,
        lambda: services.engine.search(text, page_number).to_dict()
    )

    if text:
        services.history.record(text)

    duration_ms = (time.time() - start_time) * 1000
    audit.log_search(user_id, text, int(body.get("total", 0)), duration_ms)

    return cached_response(body, status)


@router.get("/pdfs/suggestions")
def search_suggestions(
    q: str = Query(default=""),
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Previously searched queries starting with q."""
    return services.history.suggest(q, get_config().cache.suggestion_limit)


@router.get("/pdfs")
def list_pdfs(
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """List indexed documents, newest first."""
    body, status = cached_call(
        services.cache,
        "/pdfs",
        None,
        get_config().cache.list_ttl_seconds,
        lambda: [doc.to_dict() for doc in services.engine.list_documents()]
    )

    audit.log_list(user_id, len(body))
    return cached_response(body, status)


def _file_response(services: Services, document_id: str, disposition: str) -> FileResponse:
    stored, path = services.ingestion.open_blob(document_id)
    return FileResponse(
        path,
        media_type=PDF_MEDIA_TYPE,
        filename=stored.document.original_name or path.name,
        content_disposition_type=disposition
    )


@router.get("/pdfs/{document_id}/download")
def download_pdf(
    document_id: str,
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Stored file as an attachment."""
    return _file_response(services, document_id, "attachment")


@router.get("/pdfs/{document_id}/open")
def open_pdf(
    document_id: str,
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Stored file for inline display."""
    return _file_response(services, document_id, "inline")


@router.delete("/pdfs/{document_id}")
def delete_pdf(
    document_id: str,
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Remove one document and its stored file."""
    services.ingestion.delete_document(document_id)
    audit.log_admin(user_id, "delete_document", document_id)
    return {"success": True, "id": document_id}


@router.delete("/cache")
def clear_cache(
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Drop every cached response."""
    deleted = services.cache.clear()
    audit.log_admin(user_id, "clear_cache")
    return {"success": True, "message": "Cache cleared", "deleted": deleted}


@router.post("/cache/version")
def bump_cache_version(
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Invalidate cached responses by moving to a new version."""
    version = services.cache.bump_version()
    audit.log_admin(user_id, "bump_cache_version", str(version))
    return {"success": True, "version": version}


@router.delete("/corpus")
def reset_corpus(
    user_id: str = Depends(get_current_user),
    services: Services = Depends(get_services)
):
    """Delete every document, stored file and cached response."""
    removed = services.ingestion.reset_corpus()
    audit.log_admin(user_id, "reset_corpus")
    return {"success": True, "removedFiles": removed}
