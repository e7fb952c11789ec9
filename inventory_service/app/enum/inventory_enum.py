from enum import Enum


class ProductType(str, Enum):

    wall = "wall"
    toilet = "toilet"
    base = "base"
    tub = "tub"
    vanity = "vanity"
    shower_door = "shower_door"


# Query value meaning "no product type filter"
PRODUCT_TYPE_ALL = "all"
