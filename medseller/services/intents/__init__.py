from .handlers import DEFAULT_HANDLERS, HandlerMatch, IntentHandler, ResolverContext, ResolverThresholds
from .resolver import IntentResolver, normalize_query
from .tables import IntentTables, load_intent_tables, reload_intent_tables

__all__ = [
    "DEFAULT_HANDLERS",
    "HandlerMatch",
    "IntentHandler",
    "IntentResolver",
    "IntentTables",
    "ResolverContext",
    "ResolverThresholds",
    "load_intent_tables",
    "normalize_query",
    "reload_intent_tables",
]
