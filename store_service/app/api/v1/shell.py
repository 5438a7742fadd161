from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ...models.session import Viewer
from ...models.shell import ShellView
from ...services.shell_service import ShellService, get_shell_service
from ..dependencies import get_viewer

router = APIRouter()


@router.get("", response_model=ShellView, summary="메인 화면")
def get_shell(
    viewer: Annotated[Viewer, Depends(get_viewer)],
    service: Annotated[ShellService, Depends(get_shell_service)],
) -> ShellView:
    return service.build_shell(viewer.profile)
