"""
Consultas sobre réplicas de una topología.
"""
from typing import Dict, List, Optional, Set

from topology.node_access import get_node
from topology.topology_store import NodeState, Topology, replica_name


def replicas(topology: Topology) -> List[str]:
    """Todas las réplicas de la topología, en orden."""
    return [replica_name(n) for n in range(topology.replica_count)]


def replica_of(topology: Topology, node: str) -> Optional[str]:
    """
    Réplica a la que pertenece un nodo.
    
    Args:
        topology: Topología
        node: Identificador del nodo
        
    Returns:
        Nombre de la réplica o None si el nodo no existe
    """
    record = get_node(topology, node)
    return record.replica if record else None


def nodes_by_replica(topology: Topology) -> Dict[str, Set[str]]:
    """
    Agrupa los nodos por réplica.
    
    Incluye todos los nodos, también los que se están removiendo.
    
    Returns:
        Diccionario {réplica: {nodos}}
    """
    grouped: Dict[str, Set[str]] = {}
    
    for record in topology.nodes:
        grouped.setdefault(record.replica, set()).add(record.node)
    
    return grouped


def only_active(topology: Topology) -> Topology:
    """Versión de la topología con sólo los nodos activos."""
    return topology.with_nodes(
        record for record in topology.nodes
        if record.state is NodeState.ACTIVE
    )
