"""
Transiciones de topología.
Enumeración de operaciones legales y aplicación especulativa.
"""
from transitions.operations import (
    OperationKind,
    AddNode,
    RemoveNode,
    RemoveLogNode,
    Operation,
    operation_from_dict
)
from transitions.generator import (
    add_ops,
    remove_log_node_ops,
    remove_ops,
    ops,
    is_legal
)
from transitions.applier import apply_op

__all__ = [
    "OperationKind",
    "AddNode",
    "RemoveNode",
    "RemoveLogNode",
    "Operation",
    "operation_from_dict",
    "add_ops",
    "remove_log_node_ops",
    "remove_ops",
    "ops",
    "is_legal",
    "apply_op",
]
