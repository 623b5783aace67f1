from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Any, Iterable, List, Optional

from .errors import BlueprintDuplicateError, BlueprintNotFoundError
from .models import Blueprint, NewBlueprintRequest, Point
from .services import BlueprintsServices

router = APIRouter(prefix="/api/v1/blueprints", tags=["blueprints"])


class ApiResponse(BaseModel):
    """Uniform envelope for every response: status code, message, optional data."""
    code: int
    message: str
    data: Optional[Any] = None


def get_services(request: Request) -> BlueprintsServices:
    return request.app.state.services


def envelope(code: int, message: str, data: Any = None) -> JSONResponse:
    return JSONResponse(status_code=code, content=ApiResponse(code=code, message=message, data=data).model_dump())


def _listing(blueprints: Iterable[Blueprint]) -> List[dict]:
    # Sets have no order; sort so clients get a stable listing
    return [bp.model_dump() for bp in sorted(blueprints, key=lambda b: b.key)]


@router.get("")
def get_all(services: BlueprintsServices = Depends(get_services)):
    """Lists every blueprint with its raw points."""
    return envelope(200, "ok", _listing(services.get_all_blueprints()))


@router.get("/{author}")
def by_author(author: str, services: BlueprintsServices = Depends(get_services)):
    try:
        return envelope(200, "ok", _listing(services.get_blueprints_by_author(author)))
    except BlueprintNotFoundError as e:
        return envelope(404, str(e))


@router.get("/{author}/{bpname}")
def by_author_and_name(author: str, bpname: str, services: BlueprintsServices = Depends(get_services)):
    """The only endpoint whose points go through the active filter."""
    try:
        return envelope(200, "ok", services.get_blueprint(author, bpname).model_dump())
    except BlueprintNotFoundError as e:
        return envelope(404, str(e))


@router.post("")
def add(req: NewBlueprintRequest, services: BlueprintsServices = Depends(get_services)):
    bp = req.to_blueprint()
    try:
        services.add_new_blueprint(bp)
    except BlueprintDuplicateError as e:
        return envelope(400, str(e))
    return envelope(201, "created", bp.model_dump())


@router.put("/{author}/{bpname}/points")
def add_point(author: str, bpname: str, p: Point, services: BlueprintsServices = Depends(get_services)):
    """Appends a point and returns the blueprint as a single lookup would."""
    try:
        services.add_point(author, bpname, p.x, p.y)
        updated = services.get_blueprint(author, bpname)
    except BlueprintNotFoundError as e:
        return envelope(404, str(e))
    return envelope(202, "accepted", updated.model_dump())
