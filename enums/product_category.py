from enum import Enum


class ProductCategory(str, Enum):
    SMALL_DISH = "Small Dish"
    SHARK_SMOKE = "Smoked Shark"
