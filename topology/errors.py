"""
Excepciones del modelo de topología.
"""
from typing import Optional, Dict, Any, List


class TopologyError(Exception):
    """
    Excepción base para todos los errores del modelo de topología.
    """
    
    def __init__(
        self,
        message: str,
        code: str = "TOPOLOGY_ERROR",
        details: Optional[List[Dict[str, Any]]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or []
        super().__init__(message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Serializa la excepción a diccionario."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class NodeNotFoundError(TopologyError):
    """El nodo pedido no existe en la topología."""
    
    def __init__(self, node: str):
        super().__init__(
            message=f"Nodo no encontrado: {node}",
            code="NODE_NOT_FOUND",
            details=[{"field": "node", "value": node}]
        )


class DuplicateNodeError(TopologyError):
    """Se intentó añadir un nodo que ya está en la topología."""
    
    def __init__(self, node: str):
        super().__init__(
            message=f"El nodo ya existe: {node}",
            code="NODE_EXISTS",
            details=[{"field": "node", "value": node}]
        )


class UnknownOperationError(TopologyError):
    """Operación de transición desconocida."""
    
    def __init__(self, operation: Any):
        super().__init__(
            message=f"Operación desconocida: {operation!r}",
            code="UNKNOWN_OPERATION",
            details=[{"field": "f", "value": repr(operation)}]
        )


class InvalidTopologyError(TopologyError):
    """La topología violaría alguno de sus invariantes."""
    
    def __init__(self, message: str, field: Optional[str] = None):
        details = []
        if field:
            details.append({"field": field, "message": message})
        
        super().__init__(
            message=message,
            code="INVALID_TOPOLOGY",
            details=details
        )


class InvalidOperationError(TopologyError):
    """Registro de operación con un valor mal formado."""
    
    def __init__(self, operation: Any, message: str):
        super().__init__(
            message=f"Operación inválida: {message}",
            code="INVALID_OPERATION",
            details=[{"field": "value", "value": repr(operation)}]
        )


class StaleOperationError(TopologyError):
    """La operación ya no es legal sobre la topología actual."""
    
    def __init__(self, operation: Any):
        super().__init__(
            message=f"Operación ya no legal: {operation!r}",
            code="STALE_OPERATION",
            details=[{"field": "operation", "value": repr(operation)}]
        )
