"""Document layer: generic trees, merge, flatten and the flat table.

Submodules:
    tree     - DocumentTree type aliases and structural queries
    merge    - First-wins recursive merge of one language's documents
    flatten  - Tree -> FlatTable conversion with slash-joined keys
    table    - FlatTable (flat key -> non-empty variant list)

Python 3.13+.
"""

from loctree.document.flatten import build_flat_key, flatten_document
from loctree.document.merge import copy_tree, merge_documents, merge_into
from loctree.document.table import FlatTable
from loctree.document.tree import DocumentObject, DocumentTree, Scalar, node_kind

__all__ = [
    "DocumentObject",
    "DocumentTree",
    "FlatTable",
    "Scalar",
    "build_flat_key",
    "copy_tree",
    "flatten_document",
    "merge_documents",
    "merge_into",
    "node_kind",
]
