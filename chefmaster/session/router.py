from typing import Annotated
from urllib.parse import quote

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Header, Response

from chefmaster.container import Container
from chefmaster.enum import LanguageType
from chefmaster.export.pdf import ascii_filename
from chefmaster.export.service import ExportService
from chefmaster.session.schema import SessionResponse, SheetRequest
from chefmaster.session.service import SessionService

router = APIRouter()

SessionIdHeader = Annotated[str | None, Header(alias="X-Session-Id")]


@router.post("/sheets", response_model=SessionResponse)
@inject
async def generate_sheet(
    request: SheetRequest,
    x_session_id: SessionIdHeader = None,
    session_service: SessionService = Depends(Provide[Container.session_service]),
):
    """요리명으로 기술 시트를 생성한다. 공백 요리명은 현재 상태를 그대로 반환한다."""
    session = session_service.open(x_session_id)
    language = LanguageType.from_code(request.language)
    await session_service.submit(session, request.dish_name, language)
    return session_service.to_response(session)


@router.post("/sheets/retry", response_model=SessionResponse)
@inject
async def retry_sheet(
    x_session_id: SessionIdHeader = None,
    session_service: SessionService = Depends(Provide[Container.session_service]),
):
    session = session_service.open(x_session_id)
    await session_service.retry(session)
    return session_service.to_response(session)


@router.get("/sheets", response_model=SessionResponse)
@inject
async def get_sheet(
    x_session_id: SessionIdHeader = None,
    session_service: SessionService = Depends(Provide[Container.session_service]),
):
    return session_service.to_response(session_service.open(x_session_id))


@router.get("/sheets/export")
@inject
async def export_sheet(
    x_session_id: SessionIdHeader = None,
    session_service: SessionService = Depends(Provide[Container.session_service]),
    export_service: ExportService = Depends(Provide[Container.export_service]),
):
    session = session_service.open(x_session_id)
    exported = await export_service.export(session)
    if exported is None:
        return Response(status_code=204)

    disposition = (
        f"attachment; filename=\"{ascii_filename(exported.filename)}\"; "
        f"filename*=UTF-8''{quote(exported.filename)}"
    )
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": disposition},
    )
