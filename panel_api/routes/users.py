"""User management endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Query

from panel_api.core.config import settings
from panel_api.core.security import require_scope
from panel_api.db.models.user import User
from panel_api.models.schemas import Envelope, UserView, UserViewModel
from panel_api.services.user_service import UserService, get_user_service
from panel_api.utils.exceptions import BadRequestError, UserNotFoundError, ViewValidationError
from panel_api.utils.logger import logger
from panel_api.utils.responses import create_options, page_info, respond

router = APIRouter(prefix="/users", tags=["Users"])


def _load_user(service: UserService, username: str) -> User:
    user = service.get(username)
    if user is None:
        raise UserNotFoundError(username)
    return user


def _positive_int(value: str, message: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise BadRequestError(message)
    if number <= 0:
        raise BadRequestError(message)
    return number


@router.get(
    "",
    response_model=Envelope[List[UserView]],
    response_model_exclude_none=True,
    summary="Search Users"
)
def search_users(
    username: str = Query("*", description="Username filter, `*` is a wildcard"),
    email: str = Query("*", description="Email filter, `*` is a wildcard"),
    limit: str = Query(str(settings.DEFAULT_PAGE_SIZE), description="Page size"),
    page: str = Query("1", description="Page number, starting at 1"),
    token: dict = Depends(require_scope("users.edit")),
    service: UserService = Depends(get_user_service)
):
    """
    Search users by username and email.

    **Authentication:** Bearer token with the `users.edit` scope.

    Page sizes above the server maximum are capped to it.
    """
    page_size = _positive_int(limit, "page size must be a positive number")

    if page_size > settings.MAX_PAGE_SIZE:
        page_size = settings.MAX_PAGE_SIZE

    page_number = _positive_int(page, "page must be a positive number")

    results, total = service.search(username, email, page_size, page_number)

    return respond(
        UserView.from_users(results),
        page_info(page_number, page_size, settings.MAX_PAGE_SIZE, total)
    )


@router.put(
    "/{username}",
    response_model=Envelope[UserView],
    response_model_exclude_none=True,
    summary="Create User"
)
def create_user(
    username: str,
    view_model: UserViewModel,
    token: dict = Depends(require_scope("users.edit")),
    service: UserService = Depends(get_user_service)
):
    """
    Create a user named after the path.

    **Authentication:** Bearer token with the `users.edit` scope.

    The body must carry an email and a password. A username in the body is
    ignored in favour of the path.
    """
    view_model.username = username

    view_model.valid(allow_empty=False)

    if not view_model.password:
        raise ViewValidationError("password is required")

    user = User()
    view_model.copy_to_model(user)

    service.create(user)
    logger.info(f"User {user.username} created by {token.get('sub')}")

    return respond(UserView.from_user(user))


@router.get(
    "/{username}",
    response_model=Envelope[UserView],
    response_model_exclude_none=True,
    summary="Get User"
)
def get_user(
    username: str,
    token: dict = Depends(require_scope("users.view")),
    service: UserService = Depends(get_user_service)
):
    """
    Get a single user.

    **Authentication:** Bearer token with the `users.view` scope.
    """
    user = _load_user(service, username)
    return respond(UserView.from_user(user))


@router.post(
    "/{username}",
    response_model=Envelope[UserView],
    response_model_exclude_none=True,
    summary="Update User"
)
def update_user(
    username: str,
    view_model: UserViewModel,
    token: dict = Depends(require_scope("users.edit")),
    service: UserService = Depends(get_user_service)
):
    """
    Update a user. Only the fields present in the body are changed.

    **Authentication:** Bearer token with the `users.edit` scope.
    """
    view_model.valid(allow_empty=True)

    user = _load_user(service, username)
    view_model.copy_to_model(user)

    service.update(user)
    logger.info(f"User {username} updated by {token.get('sub')}")

    return respond(UserView.from_user(user))


@router.delete(
    "/{username}",
    response_model=Envelope[UserView],
    response_model_exclude_none=True,
    summary="Delete User"
)
def delete_user(
    username: str,
    token: dict = Depends(require_scope("users.edit")),
    service: UserService = Depends(get_user_service)
):
    """
    Delete a user and return what was deleted.

    **Authentication:** Bearer token with the `users.edit` scope.
    """
    user = _load_user(service, username)
    deleted = UserView.from_user(user)

    if not service.delete(user.username):
        raise UserNotFoundError(username)
    logger.info(f"User {username} deleted by {token.get('sub')}")

    return respond(deleted)


router.add_api_route("", create_options("GET"), methods=["OPTIONS"], include_in_schema=False)
router.add_api_route(
    "/{username}",
    create_options("PUT", "GET", "POST", "DELETE"),
    methods=["OPTIONS"],
    include_in_schema=False
)
