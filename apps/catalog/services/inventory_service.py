from ..domain.errors import CatalogValidationError
from ..models import ProductDetail


class InventoryService:
    @staticmethod
    def set_stock(detail: ProductDetail, quantity: int) -> ProductDetail:
        if quantity is None or quantity < 0:
            raise CatalogValidationError("Stock quantity cannot be negative", field="stock_quantity")
        detail.stock_quantity = quantity
        detail.save(update_fields=["stock_quantity"])
        return detail
