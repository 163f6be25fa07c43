from enums.product_category import ProductCategory
from exceptions.product import ProductNotFoundException
from models.product import CatalogDTO, ProductDTO, CategoryPricingRuleDTO


class CatalogService:
    """Lookups over the static catalog and the sold-out set."""

    @staticmethod
    def get_product(catalog: CatalogDTO, product_id: str) -> ProductDTO:
        for product in catalog.products:
            if product.id == product_id:
                return product
        raise ProductNotFoundException(product_id)

    @staticmethod
    def get_pricing_rule(catalog: CatalogDTO, product: ProductDTO) -> CategoryPricingRuleDTO:
        return catalog.pricing_rules[product.category]

    @staticmethod
    def products_by_category(catalog: CatalogDTO, category: ProductCategory) -> list[ProductDTO]:
        return [p for p in catalog.products if p.category == category]

    @staticmethod
    def is_combo_placeholder(catalog: CatalogDTO, product: ProductDTO) -> bool:
        return product.id == catalog.combo.placeholder_product_id

    @staticmethod
    def toggle_sold_out(sold_out_ids: list[str], product_id: str) -> list[str]:
        """
        Mark a product sold out, or back in stock if it already was.

        Sold-out state lives with the register session, never on the product.
        """
        if product_id in sold_out_ids:
            return [pid for pid in sold_out_ids if pid != product_id]
        return [*sold_out_ids, product_id]
