"""Context resolution for range blocks and list rows."""

from .types import Context, MappingValue, SequenceValue


def resolve_range_contexts(ctx: Context, property_name: str) -> list[Context] | None:
    """Resolve the sub-contexts a range iterates over.

    Only a sequence whose items are all mappings qualifies. Absent
    properties, scalars, mappings and sequences holding anything else
    resolve to None.

    Args:
        ctx: Enclosing context
        property_name: Name from the range directive

    Returns:
        Sub-contexts in order, or None
    """
    value = ctx.get(property_name)
    if not isinstance(value, SequenceValue) or not value.is_range():
        return None
    return [item.context for item in value.items if isinstance(item, MappingValue)]


def is_array_property(ctx: Context, property_name: str) -> bool:
    """True when the property holds a sequence of any element type."""
    return isinstance(ctx.get(property_name), SequenceValue)


def merge_contexts(local: Context, outer: Context) -> Context:
    """Build the scope for one range iteration.

    Every key of the enclosing context stays visible; keys of the
    iteration's own sub-context shadow them.
    """
    return outer.merge(local)
