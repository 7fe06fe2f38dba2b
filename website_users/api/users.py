# website_users/api/users.py
from fastapi import APIRouter, HTTPException, Depends, Query, Request, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from website_users.core.db import get_db
from website_users.core.exceptions import InvalidArgument, NotFound
from website_users.models import WebsiteUser
from website_users.services.user_repository import Page, UserRepository

router = APIRouter(prefix="/users", tags=["users"])

# ----- Pydantic schemas -----

class UserIn(BaseModel):
    # id is never taken from the body; the path (or the database) decides it
    name: str | None = None
    email: str | None = None

class UserResponse(BaseModel):
    id: int
    name: str | None = None
    email: str | None = None

    class Config:
        from_attributes = True


def get_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def _embedded(users: list[WebsiteUser]) -> dict:
    return {"users": [UserResponse.model_validate(u).model_dump() for u in users]}


def _page_body(page: Page) -> dict:
    return {
        "_embedded": _embedded(page.content),
        "page": {
            "size": page.size,
            "totalElements": page.total_elements,
            "totalPages": page.total_pages,
            "number": page.number,
        },
    }


def _load(repo: UserRepository, user_id: int) -> WebsiteUser:
    try:
        return repo.find_by_id(user_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

# ----- Routes -----

@router.get("")
def list_users(
    page: int = 0,
    size: int | None = None,
    sort: list[str] | None = Query(default=None),
    repo: UserRepository = Depends(get_repository),
):
    try:
        result = repo.find_all(page=page, size=size, sort=sort)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _page_body(result)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(payload: UserIn, request: Request, response: Response, repo: UserRepository = Depends(get_repository)):
    user = repo.save(WebsiteUser(name=payload.name, email=payload.email))
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user


@router.get("/search")
def list_searches(request: Request):
    href = str(request.url_for("find_by_name"))
    return {"_links": {"findByName": {"href": href + "{?name}", "templated": True}}}


@router.get("/search/findByName")
def find_by_name(name: str, repo: UserRepository = Depends(get_repository)):
    return {"_embedded": _embedded(repo.find_by_name(name))}


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, repo: UserRepository = Depends(get_repository)):
    return _load(repo, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def replace_user(
    user_id: int,
    payload: UserIn,
    request: Request,
    response: Response,
    repo: UserRepository = Depends(get_repository),
):
    user, created = repo.upsert(WebsiteUser(id=user_id, name=payload.name, email=payload.email))
    if created:
        response.status_code = 201
        response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, payload: UserIn, repo: UserRepository = Depends(get_repository)):
    user = _load(repo, user_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(user, key, value)
    return repo.save(user)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, repo: UserRepository = Depends(get_repository)):
    try:
        repo.delete_by_id(user_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(status_code=204)
