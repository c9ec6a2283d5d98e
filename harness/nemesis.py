"""
Nemesis de topología: elige transiciones legales y avanza el modelo.

No habla con el cluster. El llamador ejecuta la acción real entre choose() y
record(), y puede usar pending_log_configuration() para saber qué
configuración del log enviar antes de que la acción termine.
"""
import logging
import random
from typing import Any, Dict, Iterable, List, Optional

from harness.topology_ref import TopologyRef
from metrics import observe_operations, observe_topology, track_transition_metrics
from topology.errors import StaleOperationError
from topology.log_view import log_configuration
from topology.result import Result
from topology.topology_store import Topology
from transitions.applier import apply_op
from transitions.generator import is_legal, ops
from transitions.operations import Operation

logger = logging.getLogger(__name__)


@track_transition_metrics
def apply_legal_op(
    topology: Topology,
    op: Operation,
    candidates: Iterable[str],
    rng: Optional[random.Random] = None
) -> Result[Topology]:
    """
    Aplica ``op`` sólo si sigue siendo legal sobre ``topology``.
    
    Una operación elegida sobre una versión vieja puede haber dejado de ser
    legal (p.ej. dos bajas del log de la misma partición).
    
    Returns:
        Result de apply_op, o StaleOperationError
    """
    if not is_legal(candidates, topology, op):
        return Result.fail(StaleOperationError(op))
    
    return apply_op(topology, op, rng)


class TopologyNemesis:
    """Genera y registra transiciones de topología sobre una referencia."""
    
    def __init__(
        self,
        ref: TopologyRef,
        candidates: Iterable[str],
        rng: Optional[random.Random] = None
    ):
        """
        Inicializa el nemesis.
        
        Args:
            ref: Referencia a la topología actual
            candidates: Universo completo de nodos del test
            rng: Generador aleatorio (para corridas reproducibles)
        """
        self.ref = ref
        self.candidates = list(candidates)
        self.rng = rng or random.Random()
        
        # Registros {"type", "f", "value"} de las transiciones aplicadas
        self.history: List[Dict[str, Any]] = []
        
        observe_topology(ref.deref())
    
    def choose(self) -> Optional[Operation]:
        """
        Elige al azar una operación legal sobre la topología actual.
        
        Returns:
            Operación elegida, o None si no hay ninguna legal
        """
        candidates = ops(self.candidates, self.ref.deref(), self.rng)
        observe_operations(candidates)
        
        if not candidates:
            logger.info("Nemesis: no hay operaciones legales")
            return None
        
        return self.rng.choice(candidates)
    
    def pending_log_configuration(self, op: Operation) -> Result[List[List[str]]]:
        """
        Configuración del log para la topología que resultaría de ``op``.
        
        Args:
            op: Operación a punto de ejecutarse
            
        Returns:
            Result con la configuración, o el fallo de la transición
        """
        result = apply_op(self.ref.deref(), op, self.rng)
        
        if not result.success:
            return result
        
        return Result.ok(log_configuration(result.value))
    
    def record(self, op: Operation) -> Result[Topology]:
        """
        Avanza la topología actual aplicando ``op``, si sigue siendo legal.
        
        Args:
            op: Operación emitida contra el cluster real
            
        Returns:
            Result con la nueva topología, o StaleOperationError si la
            operación dejó de ser legal desde que se eligió
        """
        result = self.ref.swap(apply_legal_op, op, self.candidates, self.rng)
        
        if result.success:
            self.history.append(op.to_dict())
            observe_topology(result.value)
        else:
            logger.warning(
                f"Nemesis: operación descartada ({result.error.code}): "
                f"{result.error.message}"
            )
        
        return result
