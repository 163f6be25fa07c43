from pydantic import BaseModel, Field

from enums.product_category import ProductCategory


class FixedPriceOptionDTO(BaseModel):
    """A boxed/fixed-price way to sell a product (e.g. "標準盒" for 130)."""
    label: str
    price: int = Field(gt=0)


class ProductDTO(BaseModel):
    """
    Catalog entry.

    Prices and costs are per standard weight unit (1 catty = 600 g).
    Sold-out state is tracked by the register session, not here.
    """
    model_config = {"frozen": True}

    id: str
    name: str
    category: ProductCategory
    cost_per_unit: float = Field(ge=0)
    default_selling_price_per_unit: float = Field(ge=0)
    fixed_prices: list[FixedPriceOptionDTO] | None = None

    @property
    def has_fixed_prices(self) -> bool:
        return bool(self.fixed_prices)

    @property
    def is_weighable(self) -> bool:
        return self.default_selling_price_per_unit > 0


class CategoryPricingRuleDTO(BaseModel):
    """Per-category defaults for the weight/price dialog."""
    standard_box_price: int = Field(gt=0)
    min_custom_price: int = Field(ge=0)


class ComboConfigDTO(BaseModel):
    """
    Combo bundle configuration.

    components maps ComboComponent values to catalog product ids.
    """
    placeholder_product_id: str
    bundle_price: int = Field(gt=0)
    min_components: int = 2
    max_components: int = 4
    label_suffix: str = "（綜合）"
    components: dict[str, str]


class CatalogDTO(BaseModel):
    """Static catalog loaded once at startup."""
    model_config = {"frozen": True}

    products: list[ProductDTO]
    pricing_rules: dict[ProductCategory, CategoryPricingRuleDTO]
    combo: ComboConfigDTO
    modifiers: list[str] = []
