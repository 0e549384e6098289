"""Schema contracts for generic JSON trees."""

from zettel_html.contracts.load import load_schema, tree_errors, validate_file, validate_tree

__all__ = ["load_schema", "tree_errors", "validate_file", "validate_tree"]
