import logging
from uuid import uuid4

from enums.cart_line_type import CartLineType
from enums.combo_component import ComboComponent
from exceptions.combo import InsufficientComboSelectionException, InvalidComboSelectionException
from models.cart_line import CartLineDTO
from models.combo import ComboAllocationDTO
from models.product import CatalogDTO
from services.catalog import CatalogService
from services.unit_pricing import UnitPricingService, round_half_up

logger = logging.getLogger(__name__)

# Three-part combos anchored on meat, as shares of the bundle total.
# For a 200 bundle: meat+roe -> 80/70/50, meat only -> 80/60/60.
MEAT_AND_ROE_SHARES = {"meat": 8, "roe": 7, "other": 5}
MEAT_ONLY_SHARES = {"meat": 8, "other": 6}


class ComboService:
    """Fixed-price combo: component selection and bundle price allocation."""

    @staticmethod
    def toggle_component(
        selected: list[ComboComponent],
        component: ComboComponent,
        max_components: int = 4
    ) -> list[ComboComponent]:
        """
        Add or remove a component from the selection.

        Adding beyond max_components is a no-op, not an error.
        """
        if component in selected:
            return [c for c in selected if c != component]
        if len(selected) >= max_components:
            logger.debug(f"Combo selection full ({max_components}), ignoring {component.value}")
            return list(selected)
        return [*selected, component]

    @staticmethod
    def is_complete(selected: list[ComboComponent], min_components: int = 2, max_components: int = 4) -> bool:
        return min_components <= len(selected) <= max_components

    @staticmethod
    def _even_split(total: int, count: int) -> list[int]:
        """floor(total/count) each, the first absorbs the remainder."""
        base = total // count
        return [total - base * (count - 1)] + [base] * (count - 1)

    @staticmethod
    def _weighted_split(total: int, weights: list[int]) -> list[int]:
        """Split by integer weights, the first (anchor) absorbs rounding."""
        weight_sum = sum(weights)
        shares = [total * w // weight_sum for w in weights]
        shares[0] += total - sum(shares)
        return shares

    @staticmethod
    def allocate(selected: list[ComboComponent], bundle_total: int) -> list[ComboAllocationDTO]:
        """
        Allocate the bundle total across the selected components.

        Rules, in priority order:
        1. 2 or 4 components: even split
        2. 3 components with meat and roe: meat 8, roe 7, other 5 shares
        3. 3 components with meat, no roe: meat 8, others 6 shares each
        4. 3 components without meat: floor(total/3) each, first absorbs remainder
        5. any other count: floor(total/count) each, first absorbs remainder

        "First" is by selection order. Allocations are returned in selection
        order and always sum to bundle_total.

        Raises:
            InvalidComboSelectionException: On an empty or duplicate selection
        """
        if not selected:
            raise InvalidComboSelectionException("no components selected")
        if len(set(selected)) != len(selected):
            raise InvalidComboSelectionException("duplicate components")

        count = len(selected)
        prices: dict[ComboComponent, int]

        if count == 3 and ComboComponent.MEAT in selected:
            others = [c for c in selected if c != ComboComponent.MEAT]
            if ComboComponent.ROE in selected:
                other = next(c for c in others if c != ComboComponent.ROE)
                meat, roe, rest = ComboService._weighted_split(
                    bundle_total,
                    [MEAT_AND_ROE_SHARES["meat"], MEAT_AND_ROE_SHARES["roe"], MEAT_AND_ROE_SHARES["other"]]
                )
                prices = {ComboComponent.MEAT: meat, ComboComponent.ROE: roe, other: rest}
            else:
                meat, first, second = ComboService._weighted_split(
                    bundle_total,
                    [MEAT_ONLY_SHARES["meat"], MEAT_ONLY_SHARES["other"], MEAT_ONLY_SHARES["other"]]
                )
                prices = {ComboComponent.MEAT: meat, others[0]: first, others[1]: second}
        else:
            # 2, 4, 3 without meat, and the fallback all share the even split
            prices = dict(zip(selected, ComboService._even_split(bundle_total, count)))

        return [ComboAllocationDTO(component=c, price=prices[c]) for c in selected]

    @staticmethod
    def confirm(
        selected: list[ComboComponent],
        catalog: CatalogDTO,
        bundle_total: int | None = None
    ) -> list[CartLineDTO]:
        """
        Turn a confirmed selection into combo cart lines.

        Each component becomes one COMBO_PART line for its mapped product:
        quantity 1, price = allocated share, weight back-derived from the
        product's selling price, cost = proportional cost of that weight.
        All lines share one combo_id.

        Raises:
            InsufficientComboSelectionException: Fewer than the minimum components
            InvalidComboSelectionException: Duplicates, too many, or unmapped components
        """
        combo = catalog.combo
        if len(selected) < combo.min_components:
            raise InsufficientComboSelectionException(len(selected), combo.min_components)
        if len(selected) > combo.max_components:
            raise InvalidComboSelectionException(
                f"{len(selected)} components selected, maximum is {combo.max_components}"
            )

        total = bundle_total if bundle_total is not None else combo.bundle_price
        allocations = ComboService.allocate(selected, total)
        combo_id = uuid4().hex

        lines = []
        for allocation in allocations:
            product_id = combo.components.get(allocation.component.value)
            if product_id is None:
                raise InvalidComboSelectionException(f"component '{allocation.component.value}' has no product")
            product = CatalogService.get_product(catalog, product_id)

            weight = round_half_up(UnitPricingService.weight_for_amount(
                allocation.price, product.default_selling_price_per_unit, product_id=product.id
            ))
            lines.append(CartLineDTO(
                id=uuid4().hex,
                product_id=product.id,
                product_name=f"{product.name}{combo.label_suffix}",
                type=CartLineType.COMBO_PART,
                quantity=1,
                weight_grams=weight,
                price=allocation.price,
                cost=UnitPricingService.proportional_cost(product.cost_per_unit, weight),
                combo_id=combo_id,
                modifiers=[]
            ))

        logger.info(
            f"Combo {combo_id[:8]} confirmed: "
            + ", ".join(f"{a.component.value}={a.price}" for a in allocations)
        )
        return lines
