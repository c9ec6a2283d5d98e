"""
Acceso a nodos individuales de una topología.
"""
import logging
from typing import Callable, Optional

from topology.errors import InvalidTopologyError, NodeNotFoundError
from topology.result import Result
from topology.topology_store import NodeRecord, Topology

logger = logging.getLogger(__name__)


def get_node(topology: Topology, name: str) -> Optional[NodeRecord]:
    """
    Obtiene el registro de un nodo por su identificador.
    
    Args:
        topology: Topología
        name: Identificador del nodo
        
    Returns:
        Registro del nodo o None
    """
    for record in topology.nodes:
        if record.node == name:
            return record
    return None


def assoc_node(topology: Topology, name: str, record: NodeRecord) -> Result[Topology]:
    """
    Reemplaza el registro del nodo ``name`` por ``record``.
    
    Args:
        topology: Topología original (no se modifica)
        name: Identificador del nodo a reemplazar
        record: Nuevo registro
        
    Returns:
        Result con la nueva topología; NodeNotFoundError si el nodo no existe,
        InvalidTopologyError si el registro rompe algún invariante
    """
    if get_node(topology, name) is None:
        logger.debug(f"assoc_node: nodo '{name}' no está en la topología")
        return Result.fail(NodeNotFoundError(name))
    
    try:
        return Result.ok(topology.with_nodes(
            record if existing.node == name else existing
            for existing in topology.nodes
        ))
    except InvalidTopologyError as e:
        logger.debug(f"assoc_node: registro inválido para '{name}': {e.message}")
        return Result.fail(e)


def update_node(
    topology: Topology,
    name: str,
    transform: Callable[..., NodeRecord],
    *args,
    **kwargs
) -> Result[Topology]:
    """
    Transforma un nodo aplicando ``transform(registro, *args, **kwargs)``.
    
    Args:
        topology: Topología original (no se modifica)
        name: Identificador del nodo
        transform: Función que recibe el registro y retorna el nuevo
        *args: Argumentos adicionales para ``transform``
        **kwargs: Argumentos con nombre para ``transform``
        
    Returns:
        Result con la nueva topología, o el fallo de assoc_node
    """
    record = get_node(topology, name)
    
    if record is None:
        logger.debug(f"update_node: nodo '{name}' no está en la topología")
        return Result.fail(NodeNotFoundError(name))
    
    return assoc_node(topology, name, transform(record, *args, **kwargs))
