# freshconnect/repos/lookup_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from freshconnect.data.models import TalukModel, ProductCategoryModel, ExpiryTypeModel


class LookupRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_taluks(self) -> list[TalukModel]:
        return self.db.execute(select(TalukModel).order_by(TalukModel.name)).scalars().all()

    def list_categories(self) -> list[ProductCategoryModel]:
        return self.db.execute(
            select(ProductCategoryModel).order_by(ProductCategoryModel.name)
        ).scalars().all()

    def list_expiry_types(self) -> list[ExpiryTypeModel]:
        return self.db.execute(select(ExpiryTypeModel).order_by(ExpiryTypeModel.name)).scalars().all()

    def taluk_exists(self, taluk_id: int) -> bool:
        return self.db.get(TalukModel, taluk_id) is not None

    def category_exists(self, category_id: int) -> bool:
        return self.db.get(ProductCategoryModel, category_id) is not None

    def expiry_type_exists(self, expiry_type_id: int) -> bool:
        return self.db.get(ExpiryTypeModel, expiry_type_id) is not None
