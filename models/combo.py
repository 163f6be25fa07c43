from pydantic import BaseModel

from enums.combo_component import ComboComponent


class ComboAllocationDTO(BaseModel):
    """Share of the bundle price assigned to one component."""
    component: ComboComponent
    price: int
