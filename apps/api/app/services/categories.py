"""Category service layer."""

from app.adapters.records import RecordQuery
from app.schemas.category import Category, CategoryWrite
from app.services.records import RecordService


class CategoryService(RecordService):
    table = "categories"

    def list_categories(self) -> list[Category]:
        return [Category.model_validate(record) for record in self._select(RecordQuery(order_by="name"))]

    def get_category(self, category_id: int) -> Category:
        return Category.model_validate(self._get(category_id))

    def create_category(self, payload: CategoryWrite) -> Category:
        return Category.model_validate(self._insert(payload.model_dump()))

    def update_category(self, category_id: int, payload: CategoryWrite) -> Category:
        return Category.model_validate(self._update(category_id, payload.model_dump(exclude_unset=True)))

    def delete_category(self, category_id: int) -> Category:
        return Category.model_validate(self._delete(category_id))
