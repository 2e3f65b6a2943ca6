from src.use_cases.product import (
    AddProduct,
    DeleteProduct,
    EstimateExpiry,
    GetAllProducts,
    GetAllProductsResult,
    SetProductOutcome,
    UpdateProduct,
    UpdateProductStatus,
)
from src.use_cases.shopping_list import (
    AddShoppingItem,
    ClearBoughtItems,
    DeleteShoppingItem,
    GetShoppingItems,
    ToggleShoppingItem,
)
from src.use_cases.suggestion import GetSuggestions


__all__ = [
    "AddProduct",
    "AddShoppingItem",
    "ClearBoughtItems",
    "DeleteProduct",
    "DeleteShoppingItem",
    "EstimateExpiry",
    "GetAllProducts",
    "GetAllProductsResult",
    "GetShoppingItems",
    "GetSuggestions",
    "SetProductOutcome",
    "ToggleShoppingItem",
    "UpdateProduct",
    "UpdateProductStatus",
]
