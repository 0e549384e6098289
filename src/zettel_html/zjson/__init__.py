"""Generic JSON representation of zettel trees."""

from zettel_html.zjson.meta import Meta, MetaValue, make_meta
from zettel_html.zjson.walk import (
    Array,
    CloseFn,
    Object,
    Value,
    Visitor,
    get_array,
    get_attributes,
    get_number,
    get_paragraph_inline,
    get_string,
    get_type,
    make_array,
    make_object,
    walk_block,
    walk_block_object,
    walk_children,
    walk_inline,
    walk_inline_child,
    walk_inline_object,
    walk_items,
)

__all__ = [
    "Array",
    "CloseFn",
    "Meta",
    "MetaValue",
    "Object",
    "Value",
    "Visitor",
    "get_array",
    "get_attributes",
    "get_number",
    "get_paragraph_inline",
    "get_string",
    "get_type",
    "make_array",
    "make_meta",
    "make_object",
    "walk_block",
    "walk_block_object",
    "walk_children",
    "walk_inline",
    "walk_inline_child",
    "walk_inline_object",
    "walk_items",
]
