# src/askit/api/v1/endpoints/tags.py
"""Tag and tag-category endpoints."""

from fastapi import APIRouter, Query, Response, status

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import AdminDep, CurrentPrincipalDep, ModeratorDep, SessionDep
from askit.models import Tag, TagCategory
from askit.schemas.tag import TagCategoryCreate, TagCategoryRead, TagIn, TagRead, TagUpdate
from askit.services.records import get_or_404, list_rows, remove, save
from askit.services.upsert import upsert_by_natural_key

categories_router = APIRouter(prefix="/tag-categories", tags=["tags"])
router = APIRouter(prefix="/tags", tags=["tags"])


@categories_router.get("", response_model=SuccessResponse[list[TagCategoryRead]])
def list_categories(db: SessionDep) -> SuccessResponse[list[TagCategoryRead]]:
    return success([TagCategoryRead.model_validate(c) for c in list_rows(db, TagCategory)])


@categories_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[TagCategoryRead],
)
def create_category(
    payload: TagCategoryCreate, db: SessionDep, _: ModeratorDep
) -> SuccessResponse[TagCategoryRead]:
    category = save(db, TagCategory(title=payload.title))
    return success(TagCategoryRead.model_validate(category))


@categories_router.delete("/{category_id}", response_model=SuccessResponse[TagCategoryRead])
def delete_category(
    category_id: int, db: SessionDep, _: AdminDep
) -> SuccessResponse[TagCategoryRead]:
    """Delete a category together with every tag in it."""
    category = get_or_404(db, TagCategory, category_id, "Tag category")
    data = TagCategoryRead.model_validate(category)
    remove(db, category)
    return success(data)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[TagRead],
)
def create_tag(
    payload: TagIn, response: Response, db: SessionDep, _: CurrentPrincipalDep
) -> SuccessResponse[TagRead]:
    """Find or create the tag for ``(key, category_id)``.

    Answers 201 when the tag was created and 200 when it already existed.
    """
    get_or_404(db, TagCategory, payload.category_id, "Tag category")
    result = upsert_by_natural_key(
        db,
        Tag,
        {"key": payload.key, "category_id": payload.category_id},
        {},
    )
    save(db, result.row)
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return success(TagRead.model_validate(result.row))


@router.get("", response_model=SuccessResponse[list[TagRead]])
def list_tags(
    db: SessionDep,
    category_id: int | None = Query(None, description="Only tags in this category"),
) -> SuccessResponse[list[TagRead]]:
    tags = list_rows(db, Tag, category_id=category_id)
    return success([TagRead.model_validate(t) for t in tags])


@router.get("/{tag_id}", response_model=SuccessResponse[TagRead])
def get_tag(tag_id: int, db: SessionDep) -> SuccessResponse[TagRead]:
    return success(TagRead.model_validate(get_or_404(db, Tag, tag_id, "Tag")))


@router.put("/{tag_id}", response_model=SuccessResponse[TagRead])
def update_tag(
    tag_id: int, payload: TagUpdate, db: SessionDep, _: ModeratorDep
) -> SuccessResponse[TagRead]:
    """Rename or recategorise a tag; colliding with an existing tag is a conflict."""
    tag = get_or_404(db, Tag, tag_id, "Tag")
    if payload.category_id is not None:
        get_or_404(db, TagCategory, payload.category_id, "Tag category")
        tag.category_id = payload.category_id
    if payload.key is not None:
        tag.key = payload.key
    save(db, tag)
    return success(TagRead.model_validate(tag))


@router.delete("/{tag_id}", response_model=SuccessResponse[TagRead])
def delete_tag(tag_id: int, db: SessionDep, _: ModeratorDep) -> SuccessResponse[TagRead]:
    """Delete a tag; it is detached from every post, comment and report."""
    tag = get_or_404(db, Tag, tag_id, "Tag")
    data = TagRead.model_validate(tag)
    remove(db, tag)
    return success(data)
