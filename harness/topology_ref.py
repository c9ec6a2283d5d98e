"""
Referencia mutable a la topología "actual" de una corrida.

El modelo de topología es puro; este contenedor es del harness. Los workers
leen la versión actual, proponen operaciones sobre ella y avanzan la
referencia con swap(). Dos workers que aplican operaciones calculadas sobre la
misma versión sin pasar por swap() pierden una de las transiciones.
"""
import logging
import random
import threading
from typing import Callable, Iterable, List, Optional

from topology.result import Result
from topology.topology_store import Topology
from transitions.generator import ops
from transitions.operations import Operation

logger = logging.getLogger(__name__)


class TopologyRef:
    """Referencia versionada y thread-safe a una topología."""
    
    def __init__(self, topology: Topology):
        """
        Inicializa la referencia.
        
        Args:
            topology: Topología inicial
        """
        self._lock = threading.Lock()
        self._topology = topology
        self._version = 0
    
    def deref(self) -> Topology:
        """Retorna la topología actual."""
        with self._lock:
            return self._topology
    
    @property
    def version(self) -> int:
        """Número de transiciones registradas desde la creación."""
        with self._lock:
            return self._version
    
    def reset(self, topology: Topology) -> int:
        """
        Reemplaza incondicionalmente la topología actual.
        
        Returns:
            Nueva versión
        """
        with self._lock:
            self._topology = topology
            self._version += 1
            return self._version
    
    def compare_and_set(self, expected: Topology, new: Topology) -> bool:
        """
        Reemplaza la topología sólo si la actual es ``expected``.
        
        Args:
            expected: Topología que el llamador leyó
            new: Topología que la reemplaza
            
        Returns:
            True si se reemplazó
        """
        with self._lock:
            if self._topology is not expected:
                logger.debug(
                    f"TopologyRef: compare_and_set rechazado en versión {self._version}"
                )
                return False
            
            self._topology = new
            self._version += 1
            return True
    
    def swap(
        self,
        fn: Callable[..., Result[Topology]],
        *args,
        **kwargs
    ) -> Result[Topology]:
        """
        Avanza la referencia con ``fn(actual, *args, **kwargs)``.
        
        Si ``fn`` falla la referencia no cambia y se retorna el fallo.
        
        Args:
            fn: Función de transición, p.ej. apply_op
            
        Returns:
            Result de ``fn``
        """
        with self._lock:
            result = fn(self._topology, *args, **kwargs)
            
            if result.success:
                self._topology = result.value
                self._version += 1
            
            return result
    
    def operations(
        self,
        candidates: Iterable[str],
        rng: Optional[random.Random] = None
    ) -> List[Operation]:
        """Operaciones legales sobre la topología actual."""
        return ops(candidates, self.deref(), rng)
