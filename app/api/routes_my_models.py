"""
MyModel routes.

Plain CRUD over the my_models table. Handlers commit through the
injected session, so under test every commit lands in a SAVEPOINT
that the test fixtures roll back.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models import MyModel
from app.schemas.my_model import (
    MyModelCreate,
    MyModelListResponse,
    MyModelResponse,
    MyModelUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/my-models",
    tags=["MyModels"],
)


async def _get_or_404(db: AsyncSession, my_model_id: int) -> MyModel:
    my_model = await db.get(MyModel, my_model_id)
    if my_model is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="MyModel not found",
        )
    return my_model


def _name_conflict(name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"MyModel with name '{name}' already exists",
    )


async def _ensure_name_free(db: AsyncSession, name: str) -> None:
    result = await db.execute(select(MyModel.id).where(MyModel.name == name))
    if result.scalar_one_or_none() is not None:
        raise _name_conflict(name)


async def _commit_unique_name(db: AsyncSession, name: str) -> None:
    """
    Commit, mapping a unique-name violation to 409.

    The lookup in _ensure_name_free can race with a concurrent request;
    the unique index is the final arbiter.
    """
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise _name_conflict(name)


# =============================================================================
# CREATE
# =============================================================================


@router.post(
    "",
    response_model=MyModelResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a MyModel",
)
async def create_my_model(
    request: MyModelCreate,
    db: AsyncSession = Depends(get_db),
) -> MyModel:
    """
    Create a new MyModel.

    - Names must be unique (409 otherwise)
    """
    await _ensure_name_free(db, request.name)

    my_model = MyModel(
        name=request.name,
        description=request.description,
        active=request.active,
    )

    db.add(my_model)
    await _commit_unique_name(db, request.name)
    await db.refresh(my_model)

    logger.info("Created MyModel id=%s name=%s", my_model.id, my_model.name)
    return my_model


# =============================================================================
# LIST
# =============================================================================


@router.get(
    "",
    response_model=MyModelListResponse,
    summary="List MyModels",
)
async def list_my_models(
    page: int = Query(default=1, ge=1, description="Page number"),
    size: int = Query(default=20, ge=1, le=100, description="Items per page"),
    active: Optional[bool] = Query(default=None, description="Filter by active flag"),
    db: AsyncSession = Depends(get_db),
) -> MyModelListResponse:
    """
    List MyModels ordered by id.

    Supports pagination with `page` and `size`, and filtering with `active`.
    """
    offset = (page - 1) * size

    filters = []
    if active is not None:
        filters.append(MyModel.active == active)

    count_query = select(func.count()).select_from(MyModel).where(*filters)
    total = (await db.execute(count_query)).scalar_one()

    query = (
        select(MyModel)
        .where(*filters)
        .order_by(MyModel.id)
        .offset(offset)
        .limit(size)
    )
    result = await db.execute(query)
    items = [MyModelResponse.model_validate(row) for row in result.scalars()]

    return MyModelListResponse(
        items=items,
        total=total,
        page=page,
        size=size,
    )


# =============================================================================
# GET
# =============================================================================


@router.get(
    "/{my_model_id}",
    response_model=MyModelResponse,
    summary="Get MyModel by ID",
)
async def get_my_model(
    my_model_id: int,
    db: AsyncSession = Depends(get_db),
) -> MyModel:
    return await _get_or_404(db, my_model_id)


# =============================================================================
# UPDATE
# =============================================================================


@router.patch(
    "/{my_model_id}",
    response_model=MyModelResponse,
    summary="Update MyModel",
)
async def update_my_model(
    my_model_id: int,
    request: MyModelUpdate,
    db: AsyncSession = Depends(get_db),
) -> MyModel:
    """
    Partially update a MyModel.

    Only fields present in the request body are changed.
    """
    my_model = await _get_or_404(db, my_model_id)
    changes = request.model_dump(exclude_unset=True)

    new_name = changes.get("name")
    if new_name is not None and new_name != my_model.name:
        await _ensure_name_free(db, new_name)

    for field, value in changes.items():
        setattr(my_model, field, value)

    await _commit_unique_name(db, new_name or my_model.name)
    await db.refresh(my_model)

    logger.info("Updated MyModel id=%s fields=%s", my_model.id, sorted(changes))
    return my_model


# =============================================================================
# DELETE
# =============================================================================


@router.delete(
    "/{my_model_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete MyModel",
)
async def delete_my_model(
    my_model_id: int,
    db: AsyncSession = Depends(get_db),
) -> None:
    my_model = await _get_or_404(db, my_model_id)

    await db.delete(my_model)
    await db.commit()

    logger.info("Deleted MyModel id=%s", my_model_id)
