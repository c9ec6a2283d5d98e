"""
Enumeración de las operaciones de transición legales para una topología.

Funciones puras: no hacen I/O ni modifican la topología. El resultado es una
foto del momento; elegir entre las operaciones es tarea del planificador.
"""
import logging
import random
from typing import Dict, Iterable, List, Optional

from topology.replica_view import only_active
from topology.topology_store import Topology
from transitions.operations import AddNode, Operation, RemoveLogNode, RemoveNode

logger = logging.getLogger(__name__)

# Particiones del log con esta cantidad de nodos o menos no se achican
MIN_LOG_PART_THRESHOLD = 2


def _missing_candidates(candidates: Iterable[str], topology: Topology) -> List[str]:
    present = set(topology.node_names)
    
    # Sin nodos a los que unirse no hay alta posible
    if not present:
        return []
    
    missing = []
    for node in candidates:
        if node not in present and node not in missing:
            missing.append(node)
    
    return missing


def add_ops(
    candidates: Iterable[str],
    topology: Topology,
    rng: Optional[random.Random] = None
) -> List[AddNode]:
    """
    Todas las operaciones de alta de nodo que podríamos aplicar.
    
    Args:
        candidates: Universo completo de nodos del test
        topology: Topología actual
        rng: Generador aleatorio para elegir el nodo de unión
        
    Returns:
        Una operación por cada candidato ausente de la topología
    """
    rng = rng or random
    present = list(topology.node_names)
    missing = _missing_candidates(candidates, topology)
    
    return [AddNode(node=node, join=rng.choice(present)) for node in missing]


def remove_log_node_ops(topology: Topology) -> List[RemoveLogNode]:
    """
    Todas las operaciones posibles para sacar un nodo del log.
    
    Sólo se ofrecen los miembros de particiones con más de
    MIN_LOG_PART_THRESHOLD nodos activos; achicar más una partición podría
    desestabilizar el cluster.
    """
    partitions: Dict[int, List[str]] = {}
    
    for record in only_active(topology).nodes:
        if record.in_log:
            partitions.setdefault(record.log_part, []).append(record.node)
    
    ops = []
    for part in sorted(partitions):
        members = partitions[part]
        if len(members) > MIN_LOG_PART_THRESHOLD:
            ops.extend(RemoveLogNode(node=node) for node in members)
    
    return ops


def remove_ops(topology: Topology) -> List[RemoveNode]:
    """
    Todas las operaciones de baja de nodo que podríamos ejecutar.
    
    Sólo se pueden remover nodos activos que no participan en el log.
    """
    return [
        RemoveNode(node=record.node)
        for record in only_active(topology).nodes
        if not record.in_log
    ]


def ops(
    candidates: Iterable[str],
    topology: Topology,
    rng: Optional[random.Random] = None
) -> List[Operation]:
    """
    Todas las operaciones que podríamos ejecutar sobre la topología.
    
    Args:
        candidates: Universo completo de nodos del test
        topology: Topología actual
        rng: Generador aleatorio para las altas
        
    Returns:
        Altas, luego bajas del log, luego bajas de nodo
    """
    adds = add_ops(candidates, topology, rng)
    log_removals = remove_log_node_ops(topology)
    removals = remove_ops(topology)
    
    logger.debug(
        f"Operaciones posibles: {len(adds)} altas, "
        f"{len(log_removals)} bajas del log, {len(removals)} bajas"
    )
    
    return [*adds, *log_removals, *removals]


def is_legal(candidates: Iterable[str], topology: Topology, op: Operation) -> bool:
    """
    Indica si ``op`` está entre las operaciones legales de la topología.
    
    El nodo de unión de un alta es sólo una pista, así que no se compara.
    
    Args:
        candidates: Universo completo de nodos del test
        topology: Topología actual
        op: Operación a verificar
        
    Returns:
        True si la operación es legal
    """
    if isinstance(op, AddNode):
        return op.node in _missing_candidates(candidates, topology)
    elif isinstance(op, RemoveLogNode):
        return op in remove_log_node_ops(topology)
    elif isinstance(op, RemoveNode):
        return op in remove_ops(topology)
    return False
