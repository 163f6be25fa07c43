from enum import Enum


class PaymentMethod(str, Enum):
    CASH = "CASH"              # Cash in the till
    LINE_PAY = "LINE_PAY"      # Mobile wallet
    WASTE = "WASTE"            # Write-off: zero revenue, cost kept as loss

    @property
    def is_revenue(self) -> bool:
        return self != PaymentMethod.WASTE
