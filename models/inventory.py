from pydantic import BaseModel, Field

from models.product import ProductDTO


class InventoryRecordDTO(BaseModel):
    """
    Manual stock count for one product in one reconciliation session.

    Units are the product's natural unit: catty for weighed goods,
    pieces/boxes for fixed-unit goods.
    """
    opening: float = Field(default=0, ge=0)
    restock: float = Field(default=0, ge=0)
    closing: float = Field(default=0, ge=0)
    waste: float = Field(default=0, ge=0)

    @property
    def is_counted(self) -> bool:
        return any((self.opening, self.restock, self.closing, self.waste))


class InventoryRowDTO(BaseModel):
    product: ProductDTO
    record: InventoryRecordDTO
    is_fixed_unit: bool
    ref_price: float
    sales_qty: float             # From the manual count
    system_sold_unit: float      # From recorded orders, diagnostic only
    estimated_revenue: int
    actual_revenue: int
    diff: int                    # > 0 overage, < 0 shortage
