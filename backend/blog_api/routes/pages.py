"""
Blog API Backend — Static Client Page
======================================

What:  Serves the browser client at GET /.
How:   Returns index.html from the configured static directory. The page's
       script and stylesheet are served by the StaticFiles mount at /static.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from blog_api.exceptions import NotFoundError

router = APIRouter(tags=["Pages"])


@router.get("/", include_in_schema=False)
async def index(request: Request) -> FileResponse:
    index_file = Path(request.app.state.settings.static_dir) / "index.html"
    if not index_file.is_file():
        raise NotFoundError(context={"path": str(index_file)})
    return FileResponse(path=str(index_file), media_type="text/html")
