"""
Resultado explícito (éxito/fallo) para operaciones sobre la topología.
"""
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from topology.errors import TopologyError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Resultado de una operación que puede fallar.
    
    El llamador decide qué hacer con el fallo: inspeccionar ``success``,
    o llamar a ``unwrap()`` para propagar el error como excepción.
    """
    success: bool
    value: Optional[T] = None
    error: Optional[TopologyError] = None
    
    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(success=True, value=value)
    
    @classmethod
    def fail(cls, error: TopologyError) -> "Result[Any]":
        return cls(success=False, error=error)
    
    def unwrap(self) -> T:
        """
        Retorna el valor o lanza el error.
        
        Raises:
            TopologyError: Si el resultado es un fallo
        """
        if not self.success:
            raise self.error
        return self.value
    
    def unwrap_or(self, default: T) -> T:
        """Retorna el valor, o ``default`` si el resultado es un fallo."""
        return self.value if self.success else default
