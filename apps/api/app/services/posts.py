"""Post service layer."""

from app.adapters.records import RecordQuery
from app.schemas.post import CreatePostRequest, Post, UpdatePostRequest
from app.services.records import RecordService, parse_order_by

_ORDERABLE_COLUMNS = frozenset({"created_at", "updated_at", "title", "category_id"})
_SEARCH_COLUMNS = ("title", "content")


class PostService(RecordService):
    table = "posts"

    def list_posts(
        self,
        *,
        search: str | None = None,
        author_id: str | None = None,
        category_id: int | None = None,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Post]:
        column, descending = parse_order_by(order_by, default="created_at desc", allowed=_ORDERABLE_COLUMNS)
        filters: dict[str, object] = {}
        if author_id:
            filters["author_id"] = author_id
        if category_id is not None:
            filters["category_id"] = category_id

        query = RecordQuery(
            filters=filters,
            search=search or None,
            search_columns=_SEARCH_COLUMNS,
            order_by=column,
            descending=descending,
            limit=limit,
            offset=offset,
        )
        return [Post.model_validate(record) for record in self._select(query)]

    def get_post(self, post_id: str) -> Post:
        return Post.model_validate(self._get(post_id))

    def create_post(self, *, author_id: str, payload: CreatePostRequest) -> Post:
        values = payload.model_dump(exclude_none=True)
        values.setdefault("author_id", author_id)
        return Post.model_validate(self._insert(values))

    def update_post(self, post_id: str, payload: UpdatePostRequest) -> Post:
        return Post.model_validate(self._update(post_id, payload.model_dump(exclude_unset=True)))

    def delete_post(self, post_id: str) -> Post:
        return Post.model_validate(self._delete(post_id))
