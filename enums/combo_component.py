from enum import Enum


class ComboComponent(str, Enum):
    """
    Named parts of the smoked shark combo.

    Values are the keys used in the catalog's combo component table,
    which maps each part to a real product id.
    """

    MEAT = "meat"
    SKIN = "skin"
    BELLY = "belly"
    FIN_HEAD = "fin_head"
    ROE = "roe"

    @classmethod
    def from_string(cls, value: str) -> 'ComboComponent':
        """
        Convert string to ComboComponent, case-insensitive.

        Accepts "fin-head" as an alias of "fin_head".

        Raises:
            ValueError: If value is not a known component
        """
        normalized = (value or "").strip().lower().replace("-", "_")
        for component in cls:
            if component.value == normalized:
                return component
        valid = [c.value for c in cls]
        raise ValueError(f"Invalid combo component '{value}'. Valid components: {', '.join(valid)}")
