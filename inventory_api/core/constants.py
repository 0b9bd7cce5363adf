PRODUCT_CATEGORIES = (
    "Electronics",
    "Clothing",
    "Food & Beverage",
    "Furniture",
    "Stationery",
    "Hardware",
    "Other",
)
PRODUCT_UNITS = ("pcs", "box", "kg", "liter", "meter", "set")
DEFAULT_UNIT = "pcs"

USER_ROLES = ("admin", "staff", "viewer")
DEFAULT_ROLE = "viewer"
# Roles allowed to create, edit and move stock.
EDITOR_ROLES = ("admin", "staff")

STOCK_OPERATIONS = ("add", "subtract")

TRUTHY_VALUES = ("1", "true", "yes", "y")

# Largest value a 64-bit signed store INTEGER can hold.
MAX_STORE_INTEGER = 2**63 - 1
