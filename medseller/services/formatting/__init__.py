from .display import DefaultDisplay, DisplayHooks, LocalizedDisplay, format_amount, load_translations
from .response_formatter import ProductInfo, ResponseFormatter

__all__ = [
    "DefaultDisplay",
    "DisplayHooks",
    "LocalizedDisplay",
    "ProductInfo",
    "ResponseFormatter",
    "format_amount",
    "load_translations",
]
