"""
Operaciones de transición de topología.

Cada tipo de operación lleva exactamente los campos que necesita. Se
serializan al registro que consume el planificador de fallos:

    {"type": "info", "f": "add-node", "value": {"node": "k", "join": "a"}}
    {"type": "info", "f": "remove-node", "value": "a"}
"""
from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Union

from topology.errors import InvalidOperationError, UnknownOperationError


class OperationKind(Enum):
    """Tipos de operación de transición."""
    ADD_NODE = "add-node"
    REMOVE_NODE = "remove-node"
    REMOVE_LOG_NODE = "remove-log-node"


@dataclass(frozen=True)
class AddNode:
    """Añadir un nodo al cluster, uniéndose a través de ``join``."""
    node: str
    
    # Sólo una pista de arranque para el cliente; el modelo no la usa
    join: str
    
    kind = OperationKind.ADD_NODE
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "info",
            "f": self.kind.value,
            "value": {"node": self.node, "join": self.join}
        }


@dataclass(frozen=True)
class RemoveNode:
    """Remover un nodo (que ya no participa en el log) del cluster."""
    node: str
    
    kind = OperationKind.REMOVE_NODE
    
    def to_dict(self) -> Dict[str, Any]:
        return {"type": "info", "f": self.kind.value, "value": self.node}


@dataclass(frozen=True)
class RemoveLogNode:
    """Sacar un nodo de su partición del log."""
    node: str
    
    kind = OperationKind.REMOVE_LOG_NODE
    
    def to_dict(self) -> Dict[str, Any]:
        return {"type": "info", "f": self.kind.value, "value": self.node}


Operation = Union[AddNode, RemoveNode, RemoveLogNode]


def operation_from_dict(data: Dict[str, Any]) -> Operation:
    """
    Crea una operación desde su registro serializado.
    
    Args:
        data: Registro {"type": ..., "f": ..., "value": ...}
        
    Returns:
        Operación correspondiente
        
    Raises:
        UnknownOperationError: Si ``f`` no es un tipo de operación conocido
        InvalidOperationError: Si ``value`` no tiene la forma del tipo
    """
    f = data.get("f")
    value = data.get("value")
    
    try:
        kind = OperationKind(f)
    except ValueError:
        raise UnknownOperationError(f)
    
    if kind is OperationKind.ADD_NODE:
        if not isinstance(value, dict):
            raise InvalidOperationError(data, "add-node espera {node, join}")
        
        node, join = value.get("node"), value.get("join")
        if not isinstance(node, str) or not isinstance(join, str):
            raise InvalidOperationError(data, "node y join deben ser strings")
        
        return AddNode(node=node, join=join)
    
    if not isinstance(value, str):
        raise InvalidOperationError(data, f"{kind.value} espera un nodo")
    
    if kind is OperationKind.REMOVE_NODE:
        return RemoveNode(node=value)
    else:
        return RemoveLogNode(node=value)
