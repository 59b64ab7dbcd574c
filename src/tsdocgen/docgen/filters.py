"""Prop filters."""

from __future__ import annotations

from ..core.types import Component, ParserOptions, PropFilter, PropItem, StaticPropFilter


def _accept_all(prop: PropItem, component: Component) -> bool:
    return True


def build_filter(opts: ParserOptions) -> PropFilter:
    """Build the predicate that decides which props are reported.

    A callable ``prop_filter`` is used as-is. A StaticPropFilter excludes
    props by exact name and, when ``skip_props_without_doc`` is set, props
    with an empty description. No filter accepts every prop.

    Args:
        opts: Parser options

    Returns:
        Predicate over ``(prop, component)``
    """
    prop_filter = opts.prop_filter
    if prop_filter is None:
        return _accept_all
    if callable(prop_filter):
        return prop_filter
    if not isinstance(prop_filter, StaticPropFilter):
        prop_filter = StaticPropFilter.from_dict(prop_filter)

    skip_names = prop_filter.skip_props_with_name
    if isinstance(skip_names, str):
        skip_names = [skip_names]
    names = frozenset(skip_names or ())
    skip_without_doc = prop_filter.skip_props_without_doc

    def static_filter(prop: PropItem, component: Component) -> bool:
        if prop.name in names:
            return False
        if skip_without_doc and not prop.description:
            return False
        return True

    return static_filter
