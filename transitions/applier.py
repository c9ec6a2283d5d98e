"""
Aplicación especulativa de operaciones de transición.

Para remover un nodo hay que distribuir a todos los demás una nueva
configuración del log sin ese nodo, y para calcularla hace falta la topología
que *resultaría* de la remoción, que todavía no ocurrió. apply_op calcula esa
topología por adelantado.

Todo esto es de mejor esfuerzo: si una transición falla en el cluster real, o
se completa más tarde o fuera de orden, el modelo y la realidad divergen y
nadie lo detecta.
"""
import logging
import random
from typing import Any, Optional

from topology.errors import DuplicateNodeError, UnknownOperationError
from topology.node_access import get_node, update_node
from topology.result import Result
from topology.topology_store import NodeRecord, NodeState, Topology, replica_name
from transitions.operations import AddNode, RemoveLogNode, RemoveNode

logger = logging.getLogger(__name__)


def _add_node(
    topology: Topology,
    op: AddNode,
    rng: Optional[random.Random]
) -> Result[Topology]:
    if get_node(topology, op.node) is not None:
        return Result.fail(DuplicateNodeError(op.node))
    
    rng = rng or random
    
    # A diferencia de build_topology, la réplica es aleatoria y no hay log
    record = NodeRecord(
        node=op.node,
        state=NodeState.ACTIVE,
        replica=replica_name(rng.randrange(topology.replica_count))
    )
    
    return Result.ok(topology.with_nodes((*topology.nodes, record)))


def apply_op(
    topology: Topology,
    op: Any,
    rng: Optional[random.Random] = None
) -> Result[Topology]:
    """
    Calcula la topología que resultaría de aplicar una operación.
    
    Args:
        topology: Topología actual (no se modifica)
        op: AddNode, RemoveLogNode o RemoveNode
        rng: Generador aleatorio para la réplica de los nodos nuevos
        
    Returns:
        Result con la nueva topología. Falla con NodeNotFoundError si el nodo
        no existe, DuplicateNodeError si se añade un nodo presente y
        UnknownOperationError si la operación no es conocida
    """
    if isinstance(op, AddNode):
        result = _add_node(topology, op, rng)
    elif isinstance(op, RemoveLogNode):
        result = update_node(topology, op.node, NodeRecord.with_changes, log_part=None)
    elif isinstance(op, RemoveNode):
        result = update_node(topology, op.node, NodeRecord.with_changes, state=NodeState.REMOVING)
    else:
        result = Result.fail(UnknownOperationError(op))
    
    if result.success:
        logger.info(f"Transición aplicada: {op.kind.value} {op.node}")
    else:
        logger.warning(f"Transición no aplicada: {result.error.message}")
    
    return result
